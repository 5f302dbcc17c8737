"""Persistent session models."""

from src.persistent_session.models.config import (
    DEFAULT_CONFIG,
    DEFAULT_COOKIE_KEY,
    PersistentSessionConfig,
)
from src.persistent_session.models.context import CookieSpec, PersistentSessionContext
from src.persistent_session.models.metadata import PersistentMetadata, SessionMetadata
from src.persistent_session.models.record import TokenRecord, validate_lookup_clauses

__all__ = [
    "DEFAULT_CONFIG",
    "DEFAULT_COOKIE_KEY",
    "CookieSpec",
    "PersistentMetadata",
    "PersistentSessionConfig",
    "PersistentSessionContext",
    "SessionMetadata",
    "TokenRecord",
    "validate_lookup_clauses",
]
