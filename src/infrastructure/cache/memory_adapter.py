"""In-memory cache adapter implementing CacheProtocol.

Python dict with per-key expiry. No external dependencies - used for
development, tests and single-process deployments. Values are lost on
restart and are not shared between processes.
"""

import asyncio
from datetime import UTC, datetime, timedelta

from src.core.result import Result, Success
from src.infrastructure.errors import CacheError


class MemoryCacheAdapter:
    """In-process implementation of CacheProtocol.

    Every operation runs under a single asyncio.Lock, which makes pop()
    atomic with respect to other coroutines on the same event loop.

    Expired entries are dropped lazily when touched and swept on writes.

    Usage:
        ```python
        cache = MemoryCacheAdapter()
        await cache.set("key", "value", ttl_ms=60_000)
        ```
    """

    def __init__(self) -> None:
        """Initialize empty in-memory cache."""
        self._entries: dict[str, tuple[str, datetime | None]] = {}
        self._lock = asyncio.Lock()

    def _is_expired(self, expires_at: datetime | None) -> bool:
        return expires_at is not None and expires_at <= datetime.now(UTC)

    def _cleanup_expired(self) -> None:
        """Remove expired entries from memory."""
        expired_keys = [
            key
            for key, (_, expires_at) in self._entries.items()
            if self._is_expired(expires_at)
        ]
        for key in expired_keys:
            del self._entries[key]

    def _live_value(self, key: str) -> str | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        value, expires_at = entry
        if self._is_expired(expires_at):
            del self._entries[key]
            return None
        return value

    async def get(self, key: str) -> Result[str | None, CacheError]:
        """Get value from memory.

        Args:
            key: Cache key.

        Returns:
            Success with value, or None if missing or expired.
        """
        async with self._lock:
            return Success(value=self._live_value(key))

    async def set(
        self,
        key: str,
        value: str,
        ttl_ms: int | None = None,
    ) -> Result[None, CacheError]:
        """Store value in memory, overwriting any previous value.

        Args:
            key: Cache key.
            value: Value to store.
            ttl_ms: Time to live in milliseconds (None = no expiration).

        Returns:
            Success with None.
        """
        expires_at = None
        if ttl_ms is not None:
            expires_at = datetime.now(UTC) + timedelta(milliseconds=ttl_ms)

        async with self._lock:
            self._cleanup_expired()
            self._entries[key] = (value, expires_at)
        return Success(value=None)

    async def delete(self, key: str) -> Result[bool, CacheError]:
        """Delete key from memory.

        Args:
            key: Cache key.

        Returns:
            Success with True if a live entry was removed.
        """
        async with self._lock:
            existed = self._live_value(key) is not None
            self._entries.pop(key, None)
        return Success(value=existed)

    async def pop(self, key: str) -> Result[str | None, CacheError]:
        """Atomically get and delete a key.

        Args:
            key: Cache key.

        Returns:
            Success with the removed value, or None if missing or expired.
        """
        async with self._lock:
            value = self._live_value(key)
            self._entries.pop(key, None)
        return Success(value=value)
