"""Session cache implementations grouped by technology."""

from bookshelf_auth.persistence.memory import InMemorySessionCache
from bookshelf_auth.persistence.redis import RedisSessionCache

__all__ = ["InMemorySessionCache", "RedisSessionCache"]
