from enum import Enum


class UserRole(str, Enum):
    """User roles (who may edit the catalog and who may not)."""

    USER = "user"
    ADMIN = "admin"
