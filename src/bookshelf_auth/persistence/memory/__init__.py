"""In-process session cache for development and tests."""

from bookshelf_auth.persistence.memory.session_cache_memory import (
    InMemorySessionCache,
)

__all__ = ["InMemorySessionCache"]
