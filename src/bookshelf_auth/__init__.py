"""Bookshelf Auth - Generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of the catalog domain. It handles:
- Password hashing (bcrypt)
- Access/refresh token signing and verification (JWT)
- Session cache storage (Redis, or in-process for development)

Architecture:
    bookshelf_auth/
    ├── services/           # Pure logic (token codec, password hashing)
    ├── repositories/       # Abstract interfaces
    ├── persistence/        # Implementations by technology
    │   ├── redis/
    │   └── memory/
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from bookshelf_auth import TokenCodec, TokenKind, TokenPolicy
    from bookshelf_auth.persistence import RedisSessionCache
"""

from bookshelf_auth.exceptions import (
    AuthError,
    InvalidTokenError,
    SessionCacheError,
    WeakPasswordError,
)
from bookshelf_auth.repositories import SessionCache
from bookshelf_auth.schemas import TokenKind, TokenPayload
from bookshelf_auth.services import (
    PasswordHashingService,
    TokenCodec,
    TokenPolicy,
    parse_expiration,
)

__all__ = [
    # Services
    "PasswordHashingService",
    "TokenCodec",
    "TokenPolicy",
    "parse_expiration",
    # Repositories (interfaces)
    "SessionCache",
    # Schemas
    "TokenKind",
    "TokenPayload",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
    "SessionCacheError",
    "WeakPasswordError",
]
