"""Redis adapter implementing CacheProtocol.

Wraps an async Redis client and maps Redis exceptions to CacheError.

Architecture:
- Implements CacheProtocol without inheritance (structural typing)
- Maps Redis exceptions to CacheError with proper ErrorCode
- Returns Result types for all operations
- TTLs are set in milliseconds (PX) to match the token TTL unit
"""

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.infrastructure.enums import InfrastructureErrorCode
from src.infrastructure.errors import CacheError


class RedisAdapter:
    """Redis implementation of CacheProtocol.

    Note: Does NOT inherit from CacheProtocol (uses structural typing).

    Attributes:
        _redis: Async Redis client instance.
    """

    def __init__(self, redis_client: Redis) -> None:
        """Initialize Redis adapter.

        Args:
            redis_client: Async Redis client instance.
        """
        self._redis = redis_client

    async def get(self, key: str) -> Result[str | None, CacheError]:
        """Get value from Redis.

        Args:
            key: Cache key.

        Returns:
            Result with value if found, None if not found, or CacheError.
        """
        try:
            value = await self._redis.get(key)
        except RedisError as e:
            return self._failure(
                InfrastructureErrorCode.CACHE_GET_ERROR,
                f"Failed to get key '{key}' from cache",
                key,
                e,
            )
        return Success(value=self._decode(value))

    async def set(
        self,
        key: str,
        value: str,
        ttl_ms: int | None = None,
    ) -> Result[None, CacheError]:
        """Set value in Redis.

        Args:
            key: Cache key.
            value: Value to cache.
            ttl_ms: Time to live in milliseconds (None = no expiration).

        Returns:
            Result with None on success, or CacheError.
        """
        try:
            if ttl_ms is not None:
                await self._redis.set(key, value, px=ttl_ms)
            else:
                await self._redis.set(key, value)
        except RedisError as e:
            return self._failure(
                InfrastructureErrorCode.CACHE_SET_ERROR,
                f"Failed to set key '{key}' in cache",
                key,
                e,
            )
        return Success(value=None)

    async def delete(self, key: str) -> Result[bool, CacheError]:
        """Delete key from Redis.

        Args:
            key: Cache key to delete.

        Returns:
            Result with True if deleted, False if key didn't exist, or CacheError.
        """
        try:
            deleted_count = await self._redis.delete(key)
        except RedisError as e:
            return self._failure(
                InfrastructureErrorCode.CACHE_DELETE_ERROR,
                f"Failed to delete key '{key}' from cache",
                key,
                e,
            )
        return Success(value=deleted_count > 0)

    async def pop(self, key: str) -> Result[str | None, CacheError]:
        """Atomically get and delete a key (GETDEL).

        Args:
            key: Cache key.

        Returns:
            Result with the removed value, None if not found, or CacheError.
        """
        try:
            value = await self._redis.getdel(key)
        except RedisError as e:
            return self._failure(
                InfrastructureErrorCode.CACHE_POP_ERROR,
                f"Failed to pop key '{key}' from cache",
                key,
                e,
            )
        return Success(value=self._decode(value))

    @staticmethod
    def _decode(value: bytes | str | None) -> str | None:
        # Redis returns bytes unless the client decodes responses
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    @staticmethod
    def _failure(
        infrastructure_code: InfrastructureErrorCode,
        message: str,
        key: str,
        error: RedisError,
    ) -> Failure[CacheError]:
        """Map a Redis exception to a CacheError failure.

        Connection and timeout failures map to CACHE_UNAVAILABLE.
        """
        match error:
            case RedisTimeoutError():
                code = ErrorCode.CACHE_UNAVAILABLE
                infrastructure_code = InfrastructureErrorCode.CACHE_TIMEOUT
            case RedisConnectionError():
                code = ErrorCode.CACHE_UNAVAILABLE
                infrastructure_code = InfrastructureErrorCode.CACHE_CONNECTION_ERROR
            case _:
                code = ErrorCode.CACHE_OPERATION_FAILED

        return Failure(
            error=CacheError(
                code=code,
                infrastructure_code=infrastructure_code,
                message=message,
                details={"key": key, "error": str(error)},
            )
        )
