"""Redis-backed session cache."""

from __future__ import annotations

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from bookshelf_auth.exceptions import SessionCacheError
from bookshelf_auth.repositories.session_cache import SessionCache

logger = logging.getLogger(__name__)


class RedisSessionCache(SessionCache):
    """Session cache on top of ``redis.asyncio``.

    ``set`` is a single ``SET key value EX ttl`` command, so the value and
    its expiry are written atomically and a concurrent write for the same
    key simply replaces it.
    """

    DEFAULT_KEY_PREFIX = "refresh_token:"

    def __init__(
        self,
        redis_url: str,
        *,
        socket_timeout: float = 5.0,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        client: aioredis.Redis | None = None,
    ):
        self._key_prefix = key_prefix
        self._client = client or aioredis.from_url(
            redis_url,
            decode_responses=True,
            socket_timeout=socket_timeout,
            socket_connect_timeout=socket_timeout,
        )

    def _key(self, key: str) -> str:
        return f"{self._key_prefix}{key}"

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        if ttl_seconds <= 0:
            msg = "ttl_seconds must be positive"
            raise ValueError(msg)
        try:
            await self._client.set(self._key(key), value, ex=ttl_seconds)
        except (RedisError, OSError) as e:
            logger.warning("Redis SET failed: %s", type(e).__name__)
            raise SessionCacheError from e

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(self._key(key))
        except (RedisError, OSError) as e:
            logger.warning("Redis GET failed: %s", type(e).__name__)
            raise SessionCacheError from e

    async def delete(self, key: str) -> None:
        try:
            await self._client.delete(self._key(key))
        except (RedisError, OSError) as e:
            logger.warning("Redis DEL failed: %s", type(e).__name__)
            raise SessionCacheError from e

    async def ping(self) -> bool:
        try:
            return bool(await self._client.ping())
        except (RedisError, OSError) as e:
            raise SessionCacheError from e

    async def close(self) -> None:
        await self._client.aclose()
