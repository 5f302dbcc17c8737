"""Shared fixtures for integration tests.

Redis is emulated with fakeredis, so these tests need no running server.
"""

import pytest_asyncio

from src.infrastructure.cache.redis_adapter import RedisAdapter
from src.persistent_session.storage.cache import CacheTokenStore


@pytest_asyncio.fixture
async def fakeredis_client():
    """Create fakeredis client (in-memory Redis emulation).

    Note:
        Requires: pip install fakeredis[lua]
    """
    import fakeredis.aioredis

    client = fakeredis.aioredis.FakeRedis(decode_responses=False)
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def redis_adapter(fakeredis_client):
    """RedisAdapter over fakeredis."""
    return RedisAdapter(redis_client=fakeredis_client)


@pytest_asyncio.fixture
async def redis_token_store(redis_adapter):
    """Token store over the fakeredis-backed adapter."""
    return CacheTokenStore(cache=redis_adapter)
