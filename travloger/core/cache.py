import json
import logging
from typing import Any, Optional

from redis.asyncio import Redis
from redis.exceptions import RedisError

logger = logging.getLogger(__name__)


class CacheService:
    """JSON values in Redis under a ``<namespace>:`` key prefix.

    Redis is optional.  Without a client every read is a miss and every
    write is dropped; a Redis error is logged and treated the same way.
    """

    def __init__(
        self, redis_client: Optional[Redis] = None, namespace: str = "travloger"
    ) -> None:
        self._redis: Optional[Redis] = redis_client
        self._namespace = namespace

    def _key(self, key: str) -> str:
        return f"{self._namespace}:{key}"

    async def get_json(self, key: str) -> Optional[Any]:
        if self._redis is None:
            return None
        try:
            raw = await self._redis.get(self._key(key))
        except (RedisError, OSError):
            logger.warning("Cache read failed for %s", key)
            return None
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, TypeError):
            logger.warning("Discarding unreadable cache entry %s", key)
            return None

    async def set_json(self, key: str, data: Any, ttl: Optional[int] = None) -> None:
        """Store *data*; datetimes and decimals are written as strings."""
        if self._redis is None:
            return
        payload = json.dumps(data, default=str)
        try:
            if ttl:
                await self._redis.setex(self._key(key), ttl, payload)
            else:
                await self._redis.set(self._key(key), payload)
        except (RedisError, OSError):
            logger.warning("Cache write failed for %s", key)

    async def invalidate(self, *keys: str) -> None:
        if self._redis is None or not keys:
            return
        try:
            await self._redis.delete(*(self._key(k) for k in keys))
        except (RedisError, OSError):
            logger.warning("Cache invalidation failed for %s", ", ".join(keys))

    @property
    def is_available(self) -> bool:
        return self._redis is not None
