"""Domain layer - ports the application depends on.

Structure:
- protocols/: Protocol definitions implemented by infrastructure adapters
"""
