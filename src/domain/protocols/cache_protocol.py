"""Cache protocol for domain layer.

Defines the key/value cache interface the persistent session store needs,
without knowing about any specific implementation. Infrastructure adapters
(Redis, in-process memory) implement this protocol structurally.

Architecture:
- Protocol-based - uses structural typing
- All operations return Result types
- TTLs are expressed in milliseconds
"""

from typing import Protocol

from src.core.errors import DomainError
from src.core.result import Result


class CacheProtocol(Protocol):
    """Cache protocol - what the token store needs from a cache.

    All operations return Result types. A Failure carries a CacheError; the
    caller decides whether it is fatal.
    """

    async def get(self, key: str) -> Result[str | None, DomainError]:
        """Get value from cache.

        Args:
            key: Cache key.

        Returns:
            Result with value if found, None if not found, or CacheError.
        """
        ...

    async def set(
        self,
        key: str,
        value: str,
        ttl_ms: int | None = None,
    ) -> Result[None, DomainError]:
        """Set value in cache, overwriting any previous value.

        Args:
            key: Cache key.
            value: Value to store.
            ttl_ms: Time to live in milliseconds (None = no expiration).

        Returns:
            Result with None on success, or CacheError.
        """
        ...

    async def delete(self, key: str) -> Result[bool, DomainError]:
        """Delete key from cache.

        Args:
            key: Cache key.

        Returns:
            Result with True if deleted, False if key didn't exist, or CacheError.
        """
        ...

    async def pop(self, key: str) -> Result[str | None, DomainError]:
        """Atomically get and delete a key.

        Two concurrent pops of the same key never both observe the value.

        Args:
            key: Cache key.

        Returns:
            Result with the removed value, None if not found, or CacheError.
        """
        ...
