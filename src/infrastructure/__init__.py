"""Infrastructure layer - Adapters implementing domain protocols.

Structure:
- cache/: Cache backends (Redis, in-process memory)
- logging/: structlog-based logger adapter
- errors/, enums/: Infrastructure error types and codes

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
