"""Redis implementation of the session cache."""

from bookshelf_auth.persistence.redis.session_cache_redis import RedisSessionCache

__all__ = ["RedisSessionCache"]
