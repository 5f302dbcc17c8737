"""Pytest configuration and shared fixtures.

Fixtures build persistent session managers over a fresh in-memory cache per
test, so no state leaks between tests. Integration tests needing Redis use
fakeredis (see tests/integration/conftest.py).
"""

import asyncio
from unittest.mock import Mock

import pytest

from src.infrastructure.cache.memory_adapter import MemoryCacheAdapter
from src.persistent_session.models.config import PersistentSessionConfig
from src.persistent_session.service import PersistentSessionManager
from src.persistent_session.storage.cache import CacheTokenStore
from tests.fixtures.mock_collaborators import (
    FakeSessionPlug,
    FakeUser,
    InMemoryUserResolver,
)

@pytest.fixture
def user():
    """User that can be resolved from stored lookup clauses."""
    return FakeUser(id=42)


@pytest.fixture
def user_resolver(user):
    """UserResolver knowing only ``user``."""
    return InMemoryUserResolver(user)


@pytest.fixture
def session_plug():
    """Primary session double with no active session."""
    return FakeSessionPlug()


@pytest.fixture
def config():
    """Default persistent session configuration."""
    return PersistentSessionConfig()


@pytest.fixture
def memory_cache():
    """Fresh in-memory cache backend."""
    return MemoryCacheAdapter()


@pytest.fixture
def token_store(memory_cache):
    """Token store over the in-memory cache."""
    return CacheTokenStore(cache=memory_cache)


@pytest.fixture
def mock_logger():
    """Logger double recording every call."""
    return Mock()


@pytest.fixture
def manager(config, token_store, user_resolver, session_plug, mock_logger):
    """PersistentSessionManager over the in-memory store."""
    return PersistentSessionManager(
        config=config,
        store=token_store,
        user_resolver=user_resolver,
        session_plug=session_plug,
        logger=mock_logger,
    )


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with fakeredis or the ASGI app"
    )
    config.addinivalue_line("markers", "asyncio: Async test that requires event loop")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if asyncio.iscoroutinefunction(getattr(item, "function", None)):
            item.add_marker(pytest.mark.asyncio)
