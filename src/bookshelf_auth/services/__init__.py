"""Authentication services.

Provides token encoding/verification and password hashing.
"""

from bookshelf_auth.services.password_service import PasswordHashingService
from bookshelf_auth.services.token_codec import (
    TokenCodec,
    TokenPolicy,
    parse_expiration,
)

__all__ = [
    "PasswordHashingService",
    "TokenCodec",
    "TokenPolicy",
    "parse_expiration",
]
