"""Test suite for the persistent session package.

Test structure:
- unit/: Unit tests - models, planning functions, manager, config
- integration/: Integration tests - Redis (fakeredis), structlog, FastAPI app
"""
