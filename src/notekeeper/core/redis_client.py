"""Redis connection management."""

import logging
from typing import Optional

import redis.asyncio as redis

from ..config import get_settings

logger = logging.getLogger(__name__)


class RedisClient:
    """Owns the connection pool used by the token blacklist."""

    def __init__(self, url: Optional[str] = None, max_connections: Optional[int] = None):
        settings = get_settings()
        self.url = url or settings.redis_url
        self.max_connections = max_connections or settings.redis_max_connections
        self.redis: Optional[redis.Redis] = None

    async def connect(self) -> redis.Redis:
        """Connect to Redis and check the server answers."""
        try:
            self.redis = redis.from_url(
                self.url,
                max_connections=self.max_connections,
                decode_responses=True
            )
            await self.redis.ping()
            logger.info("Connected to Redis successfully")
            return self.redis
        except Exception as e:
            logger.error(f"Failed to connect to Redis: {e}")
            raise

    async def disconnect(self) -> None:
        """Disconnect from Redis."""
        if self.redis:
            await self.redis.aclose()
            self.redis = None
            logger.info("Disconnected from Redis")
