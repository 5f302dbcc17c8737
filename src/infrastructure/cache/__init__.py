"""Cache infrastructure package.

Architecture:
- RedisAdapter: Redis implementation of CacheProtocol
- MemoryCacheAdapter: In-process implementation of CacheProtocol
- Use src.core.container.get_cache_backend() for the shared Redis backend
"""

from src.infrastructure.cache.memory_adapter import MemoryCacheAdapter
from src.infrastructure.cache.redis_adapter import RedisAdapter

__all__ = [
    "MemoryCacheAdapter",
    "RedisAdapter",
]
