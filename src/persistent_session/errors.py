"""Persistent session exceptions.

Two families:
- TokenIntegrityError: a stored token record is malformed. Raised out of
  authenticate() and never swallowed.
- TokenStoreError: the backing cache failed (connection, timeout, rejected
  command). Propagated without retry.

A missing token or an unknown user is NOT an error; the request simply
continues unauthenticated.
"""

from typing import Any

from src.core.errors import DomainError


class PersistentSessionError(Exception):
    """Base class for persistent session failures."""


class TokenIntegrityError(PersistentSessionError):
    """Stored token record violates its invariants."""


class InvalidLookupClausesError(TokenIntegrityError):
    """Token record lookup clauses are not exactly ``{"id": <user id>}``.

    Attributes:
        clauses: The offending clauses as read from the store.
    """

    def __init__(self, clauses: Any) -> None:
        self.clauses = clauses
        super().__init__(
            f"Invalid lookup clauses in persistent session token record: {clauses!r}"
        )


class CorruptTokenRecordError(TokenIntegrityError):
    """Stored payload fits neither the current nor a legacy record shape."""


class TokenStoreError(PersistentSessionError):
    """Token store backend failed.

    Attributes:
        error: The DomainError returned by the cache backend, if any.
    """

    def __init__(self, message: str, *, error: DomainError | None = None) -> None:
        self.error = error
        super().__init__(message)
