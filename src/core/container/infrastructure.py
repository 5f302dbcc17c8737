"""Infrastructure dependency factories.

Application-scoped singletons for core infrastructure services:
- Cache backend (Redis)
- Logging (console)
"""

from functools import lru_cache
from typing import TYPE_CHECKING

from src.core.config import settings

if TYPE_CHECKING:
    from src.domain.protocols.cache_protocol import CacheProtocol
    from src.domain.protocols.logger_protocol import LoggerProtocol


@lru_cache()
def get_cache_backend() -> "CacheProtocol":
    """Get Redis cache backend singleton (app-scoped).

    Returns RedisAdapter with connection pooling. The pool is shared across
    the entire application. No connection is opened until the first command.

    Returns:
        Cache backend implementing CacheProtocol.

    Usage:
        manager = get_persistent_session_manager(
            config,
            user_resolver=resolver,
            session_plug=plug,
            cache_client=get_cache_backend(),
        )
    """
    from redis.asyncio import ConnectionPool, Redis

    from src.infrastructure.cache.redis_adapter import RedisAdapter

    pool = ConnectionPool.from_url(
        settings.redis_url,
        max_connections=50,
        decode_responses=False,
        socket_connect_timeout=5,
        socket_timeout=5,
        retry_on_timeout=True,
    )
    redis_client = Redis(connection_pool=pool)
    return RedisAdapter(redis_client=redis_client)


@lru_cache()
def get_logger() -> "LoggerProtocol":
    """Return the application-scoped logger singleton.

    Adapter selection is centralized here (composition root):
    - development: ConsoleAdapter (human-readable)
    - testing/ci/production: ConsoleAdapter (JSON)

    Returns:
        LoggerProtocol: Logger instance implementing the protocol.
    """
    from src.infrastructure.logging.console_adapter import ConsoleAdapter

    env = (
        settings.environment.value
        if hasattr(settings.environment, "value")
        else str(settings.environment)
    )
    use_json = env in {"testing", "ci", "production"}
    return ConsoleAdapter(use_json=use_json, level=settings.log_level)
