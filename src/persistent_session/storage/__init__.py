"""Persistent session token stores."""

from src.persistent_session.storage.base import PersistentSessionStore
from src.persistent_session.storage.cache import CacheTokenStore

__all__ = ["CacheTokenStore", "PersistentSessionStore"]
