"""Cache-backed token store.

Works with any cache implementing CacheProtocol (Redis, in-process memory).
Records are serialized to JSON under ``persistent_session:<token id>``.
"""

import json

from src.core.errors import DomainError
from src.core.result import Failure, Result, Success
from src.domain.protocols.cache_protocol import CacheProtocol

from ..compat import load_token_record
from ..errors import CorruptTokenRecordError, TokenStoreError
from ..models.record import TokenRecord
from .base import PersistentSessionStore

KEY_PREFIX = "persistent_session"


class CacheTokenStore(PersistentSessionStore):
    """Token store on top of a CacheProtocol backend.

    Backend failures are raised as TokenStoreError; no retries.

    Example:
        ```python
        from src.infrastructure.cache import MemoryCacheAdapter

        store = CacheTokenStore(cache=MemoryCacheAdapter())
        await store.put("token-id", record, ttl_ms=60_000)
        ```
    """

    def __init__(self, cache: CacheProtocol) -> None:
        """Initialize with a cache backend.

        Args:
            cache: Any backend implementing CacheProtocol.
        """
        self.cache = cache

    def _token_key(self, token_id: str) -> str:
        """Generate cache key for a token (e.g. ``persistent_session:abc``)."""
        return f"{KEY_PREFIX}:{token_id}"

    async def put(self, key: str, record: TokenRecord, ttl_ms: int) -> None:
        """Serialize and cache a token record with TTL."""
        value = json.dumps(record.to_dict())
        self._unwrap(
            await self.cache.set(self._token_key(key), value, ttl_ms=ttl_ms), "put"
        )

    async def get(self, key: str) -> TokenRecord | None:
        """Fetch and deserialize a token record."""
        payload = self._unwrap(await self.cache.get(self._token_key(key)), "get")
        return self._deserialize(payload)

    async def delete(self, key: str) -> None:
        """Remove a token record."""
        self._unwrap(await self.cache.delete(self._token_key(key)), "delete")

    async def take(self, key: str) -> TokenRecord | None:
        """Atomically pop and deserialize a token record."""
        payload = self._unwrap(await self.cache.pop(self._token_key(key)), "take")
        return self._deserialize(payload)

    def _deserialize(self, payload: str | None) -> TokenRecord | None:
        if payload is None:
            return None
        try:
            decoded = json.loads(payload)
        except json.JSONDecodeError as e:
            raise CorruptTokenRecordError(f"Token record is not valid JSON: {e}") from e
        return load_token_record(decoded)

    @staticmethod
    def _unwrap[T](result: Result[T, DomainError], operation: str) -> T:
        match result:
            case Success(value=value):
                return value
            case Failure(error=error):
                raise TokenStoreError(
                    f"Persistent session store {operation} failed: {error}",
                    error=error,
                )
            case _:
                raise TokenStoreError(
                    f"Unexpected result from cache backend during {operation}"
                )
