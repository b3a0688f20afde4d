from types import SimpleNamespace
from typing import TYPE_CHECKING, AsyncGenerator, Callable
from unittest.mock import AsyncMock

if TYPE_CHECKING:
    from travloger.core.cache import CacheService

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from tests.factories import build_rule
from travloger.main import app


@pytest_asyncio.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Yield an ``httpx.AsyncClient`` wired to the FastAPI app.

    Dependency overrides set by a test are cleared afterwards.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def mock_redis() -> AsyncMock:
    """Return an ``AsyncMock`` that behaves like ``redis.asyncio.Redis``."""
    redis = AsyncMock()
    redis.get = AsyncMock(return_value=None)
    redis.set = AsyncMock()
    redis.setex = AsyncMock()
    redis.delete = AsyncMock()
    redis.ping = AsyncMock()
    return redis


@pytest.fixture
def mock_cache(mock_redis) -> "CacheService":
    """Return a ``CacheService`` backed by the mock Redis client."""
    from travloger.core.cache import CacheService

    return CacheService(redis_client=mock_redis)


@pytest.fixture
def rule_factory() -> Callable[..., SimpleNamespace]:
    return build_rule


@pytest.fixture
def rule_store() -> AsyncMock:
    """A rule store that returns no rules until a test sets some."""
    store = AsyncMock()
    store.get_applicable_rules = AsyncMock(return_value=[])
    return store


@pytest.fixture
def lead_store() -> AsyncMock:
    store = AsyncMock()
    store.get_fields = AsyncMock(return_value=None)
    store.update_score = AsyncMock()
    store.commit = AsyncMock()
    return store
