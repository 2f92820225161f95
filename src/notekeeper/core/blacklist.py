"""Revocation list for access tokens presented at logout."""

import logging
from abc import ABC, abstractmethod

import redis.asyncio as redis

logger = logging.getLogger(__name__)

BLACKLIST_KEY = "tokenBlacklist"


class TokenBlacklist(ABC):
    """Shared list of raw access tokens that must no longer authenticate."""

    @abstractmethod
    async def add(self, token: str) -> None:
        pass

    @abstractmethod
    async def contains(self, token: str) -> bool:
        pass


class RedisTokenBlacklist(TokenBlacklist):
    """
    Blacklist stored as a Redis list.

    Entries are pushed with LPUSH and never expire; membership reads the whole
    list, so lookups grow linearly with the number of logouts.
    The client must be created with ``decode_responses=True``.
    """

    def __init__(self, client: redis.Redis, key: str = BLACKLIST_KEY):
        self.client = client
        self.key = key

    async def add(self, token: str) -> None:
        await self.client.lpush(self.key, token)
        logger.info("Access token added to blacklist")

    async def contains(self, token: str) -> bool:
        tokens = await self.client.lrange(self.key, 0, -1)
        return token in tokens
