"""User domain - identity, credentials and account status.

Design notes:
- User ID is a random UUID4 generated at creation (opaque, unpredictable)
- Email is unique and case-normalized
- Status follows pending -> active -> inactive
- Repository interface defined here, implementation in infrastructure
"""

from bookshelf.domain.user.aggregates import User
from bookshelf.domain.user.exceptions import (
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidStatusTransitionError,
    UserNotFoundError,
)
from bookshelf.domain.user.repositories import UserRepository
from bookshelf.domain.user.value_objects import Email, UserRole, UserStatus

__all__ = [
    "Email",
    "EmailAlreadyExistsError",
    "InvalidEmailError",
    "InvalidStatusTransitionError",
    "User",
    "UserNotFoundError",
    "UserRepository",
    "UserRole",
    "UserStatus",
]
