"""Value objects for the user domain."""

from bookshelf.domain.user.value_objects.email import Email
from bookshelf.domain.user.value_objects.user_role import UserRole
from bookshelf.domain.user.value_objects.user_status import UserStatus

__all__ = [
    "Email",
    "UserRole",
    "UserStatus",
]
