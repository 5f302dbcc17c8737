"""Persistent session manager factory for dependency injection.

Wires the token store and cache backend selected by configuration with the
collaborators supplied by the application.

Usage:
    from src.core.config import settings
    from src.core.container import get_cache_backend
    from src.persistent_session.factory import get_persistent_session_manager
    from src.persistent_session.models.config import PersistentSessionConfig

    manager = get_persistent_session_manager(
        PersistentSessionConfig.from_settings(settings),
        user_resolver=users,
        session_plug=sessions,
        cache_client=get_cache_backend(),
    )
"""

from src.domain.protocols.cache_protocol import CacheProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.cache.memory_adapter import MemoryCacheAdapter

from .models.config import PersistentSessionConfig
from .protocols import PrimarySessionPlug, UserResolver
from .service import PersistentSessionManager
from .storage.base import PersistentSessionStore
from .storage.cache import CacheTokenStore


def get_persistent_session_manager(
    config: PersistentSessionConfig,
    *,
    user_resolver: UserResolver,
    session_plug: PrimarySessionPlug,
    cache_client: CacheProtocol | None = None,
    store: PersistentSessionStore | None = None,
    logger: LoggerProtocol | None = None,
) -> PersistentSessionManager:
    """Create configured PersistentSessionManager instance.

    Args:
        config: Persistent session configuration
        user_resolver: Resolves users from stored lookup clauses
        session_plug: Primary session integration
        cache_client: Cache backend (required for the "redis" backend;
            optional for "memory")
        store: Custom token store; bypasses store selection entirely
        logger: Logger instance (optional, uses default if not provided)

    Returns:
        Fully configured PersistentSessionManager instance

    Raises:
        ValueError: If required dependencies are missing for chosen config

    Example:
        >>> manager = get_persistent_session_manager(
        ...     PersistentSessionConfig(),
        ...     user_resolver=users,
        ...     session_plug=sessions,
        ... )
    """
    if store is None:
        store = _create_store(config=config, cache_client=cache_client)

    return PersistentSessionManager(
        config=config,
        store=store,
        user_resolver=user_resolver,
        session_plug=session_plug,
        logger=logger,
    )


def _create_store(
    config: PersistentSessionConfig,
    cache_client: CacheProtocol | None,
) -> PersistentSessionStore:
    """Create token store based on configuration.

    Args:
        config: Persistent session configuration
        cache_client: Cache backend, if supplied

    Returns:
        Configured PersistentSessionStore instance

    Raises:
        ValueError: If store type is invalid or required dependencies missing
    """
    if config.persistent_session_store == "cache":
        return CacheTokenStore(
            cache=_create_cache_backend(config=config, cache_client=cache_client)
        )
    else:
        raise ValueError(
            f"Invalid persistent_session_store: {config.persistent_session_store}. "
            "Must be 'cache'"
        )


def _create_cache_backend(
    config: PersistentSessionConfig,
    cache_client: CacheProtocol | None,
) -> CacheProtocol:
    """Create cache backend for the cache token store.

    Raises:
        ValueError: If backend is invalid or required dependencies missing
    """
    if config.cache_store_backend == "redis":
        if cache_client is None:
            raise ValueError("cache_client is required for 'redis' cache_store_backend")
        return cache_client
    elif config.cache_store_backend == "memory":
        return cache_client or MemoryCacheAdapter()
    else:
        raise ValueError(
            f"Invalid cache_store_backend: {config.cache_store_backend}. "
            "Must be 'memory' or 'redis'"
        )
