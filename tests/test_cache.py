from types import SimpleNamespace
from unittest.mock import patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from travloger.core.cache import CacheService
from travloger.dependencies import get_redis_client
from travloger.main import app, lifespan


class TestCacheService:
    @pytest.mark.asyncio
    async def test_without_redis_everything_is_a_miss(self):
        cache = CacheService()

        await cache.set_json("summary", {"a": 1})
        await cache.invalidate("summary")

        assert await cache.get_json("summary") is None
        assert cache.is_available is False

    @pytest.mark.asyncio
    async def test_keys_are_namespaced(self, mock_cache, mock_redis):
        await mock_cache.set_json("summary", {"a": 1}, ttl=60)

        mock_redis.setex.assert_awaited_once_with("travloger:summary", 60, '{"a": 1}')

    @pytest.mark.asyncio
    async def test_redis_errors_degrade_to_miss(self, mock_cache, mock_redis):
        mock_redis.get.side_effect = RedisConnectionError("down")

        assert await mock_cache.get_json("summary") is None

    @pytest.mark.asyncio
    async def test_unreadable_entry_is_a_miss(self, mock_cache, mock_redis):
        mock_redis.get.return_value = "{not json"

        assert await mock_cache.get_json("summary") is None


class TestRedisLifecycle:
    """One Redis client is opened at startup and closed at shutdown."""

    @pytest.mark.asyncio
    async def test_client_shared_then_closed(self, mock_redis):
        with patch("travloger.dependencies.Redis.from_url", return_value=mock_redis):
            async with lifespan(app):
                assert app.state.redis is mock_redis
                request = SimpleNamespace(app=app)
                assert await get_redis_client(request) is mock_redis
                assert await get_redis_client(request) is mock_redis

        mock_redis.ping.assert_awaited_once()
        mock_redis.aclose.assert_awaited_once()
        assert app.state.redis is None

    @pytest.mark.asyncio
    async def test_unreachable_redis_disables_caching(self, mock_redis):
        mock_redis.ping.side_effect = RedisConnectionError("refused")

        with patch("travloger.dependencies.Redis.from_url", return_value=mock_redis):
            async with lifespan(app):
                assert app.state.redis is None

        mock_redis.aclose.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_no_client_before_startup(self):
        request = SimpleNamespace(app=SimpleNamespace(state=SimpleNamespace()))

        assert await get_redis_client(request) is None
