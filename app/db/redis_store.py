"""
Redis Store Adapter

Production backend: mapping records live in Redis (or any Redis-protocol
KV service) with native per-key GET/SET. Expiry, if wanted, is configured
on the Redis side; this adapter never sets a TTL.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from app.db.interface import KeyValueStore

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)


class RedisStore(KeyValueStore):
    """
    Key-value store backed by redis.asyncio.

    Args:
        client: Async Redis client. from_url builds one with
            decode_responses=True; a client injected without it returns
            bytes, which get() decodes as UTF-8
    """

    name = "redis"

    def __init__(self, client: Redis) -> None:
        self._redis = client

    @classmethod
    def from_url(cls, url: str) -> RedisStore:
        """Build a store from a redis:// or rediss:// connection string."""
        from redis.asyncio import Redis

        return cls(Redis.from_url(url, decode_responses=True))

    async def get(self, key: str) -> Optional[str]:
        value = await self._redis.get(key)
        if isinstance(value, bytes):
            return value.decode("utf-8")
        return value

    async def set(self, key: str, value: str) -> None:
        await self._redis.set(key, value)

    async def close(self) -> None:
        await self._redis.aclose()
