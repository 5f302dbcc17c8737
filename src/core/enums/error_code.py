"""Domain error codes.

Machine-readable codes carried by DomainError subclasses. Infrastructure
adapters map their internal codes onto these before returning a Failure.
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes."""

    # Cache errors
    CACHE_UNAVAILABLE = "cache_unavailable"
    CACHE_OPERATION_FAILED = "cache_operation_failed"
