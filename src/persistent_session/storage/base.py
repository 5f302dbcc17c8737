"""Persistent session token store abstract interface.

This module defines the PersistentSessionStore interface that all token
store implementations must follow.
"""

from abc import ABC, abstractmethod

from ..models.record import TokenRecord


class PersistentSessionStore(ABC):
    """Abstract interface for token store implementations.

    The store owns physical expiry (TTL). The manager owns logical
    single-use deletion, which relies on ``take`` being atomic.

    Implementations:
        - CacheTokenStore: JSON records in any CacheProtocol backend
    """

    @abstractmethod
    async def put(self, key: str, record: TokenRecord, ttl_ms: int) -> None:
        """Store a token record, overwriting any existing one.

        Args:
            key: Token id.
            record: Record to store.
            ttl_ms: Time to live in milliseconds.

        Raises:
            TokenStoreError: If the backend fails.
        """
        pass

    @abstractmethod
    async def get(self, key: str) -> TokenRecord | None:
        """Read a token record without consuming it.

        Args:
            key: Token id.

        Returns:
            TokenRecord, or None if missing or expired.

        Raises:
            TokenStoreError: If the backend fails.
            CorruptTokenRecordError: If the stored payload is unreadable.
        """
        pass

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Delete a token record. Deleting a missing key is not an error.

        Args:
            key: Token id.

        Raises:
            TokenStoreError: If the backend fails.
        """
        pass

    @abstractmethod
    async def take(self, key: str) -> TokenRecord | None:
        """Atomically read and delete a token record.

        Of two concurrent takes of the same key, at most one gets the record.

        Args:
            key: Token id.

        Returns:
            TokenRecord, or None if missing or expired.

        Raises:
            TokenStoreError: If the backend fails.
            CorruptTokenRecordError: If the stored payload is unreadable.
        """
        pass
