"""Repository interfaces for bookshelf_auth.

Implementations live in ``bookshelf_auth.persistence`` grouped by
technology.
"""

from bookshelf_auth.repositories.session_cache import SessionCache

__all__ = ["SessionCache"]
