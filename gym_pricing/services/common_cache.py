"""
Redis JSON cache for pricing snapshots
Cache errors are logged and treated as misses so quotes still work without Redis.
"""

import json
import logging
from typing import Optional, Any
import redis.asyncio as redis

from gym_pricing.core.config import settings

logger = logging.getLogger(__name__)


class SimpleCache:
    """Simple Redis cache"""

    def __init__(self, redis_client: Optional[redis.Redis] = None, key_prefix: str = ""):
        self.redis_client = redis_client
        self.key_prefix = key_prefix

    async def init_redis(self) -> None:
        """Open the Redis connection"""
        if not self.redis_client:
            self.redis_client = redis.from_url(
                settings.redis_url_computed,
                encoding='utf-8',
                decode_responses=True,
                socket_timeout=30,
                socket_connect_timeout=30,
                retry_on_timeout=True,
                max_connections=20
            )

        try:
            await self.redis_client.ping()
            logger.info(f"{self.key_prefix} cache connected to Redis")
        except Exception as e:
            logger.error(f"Redis connection failed: {e}")
            raise

    async def close_redis(self) -> None:
        """Close the Redis connection"""
        if self.redis_client:
            await self.redis_client.close()

    def _get_key(self, key: str) -> str:
        """Full cache key"""
        return f"{self.key_prefix}{key}" if self.key_prefix else key

    async def get(self, key: str) -> Optional[Any]:
        """Read a cached value"""
        if not self.redis_client:
            return None
        try:
            data = await self.redis_client.get(self._get_key(key))
            if data:
                return json.loads(data)
            return None

        except Exception as e:
            logger.error(f"Cache read failed {key}: {e}")
            return None

    async def set(self, key: str, value: Any, ttl: int = 3600) -> bool:
        """Write a value with a TTL"""
        if not self.redis_client:
            return False
        try:
            data = json.dumps(value, default=str, ensure_ascii=False)
            await self.redis_client.setex(self._get_key(key), ttl, data)
            return True

        except Exception as e:
            logger.error(f"Cache write failed {key}: {e}")
            return False

    async def delete(self, key: str) -> bool:
        """Drop a cached value"""
        if not self.redis_client:
            return False
        try:
            result = await self.redis_client.delete(self._get_key(key))
            return result > 0

        except Exception as e:
            logger.error(f"Cache delete failed {key}: {e}")
            return False


pricing_cache = SimpleCache(key_prefix="pricing:")
