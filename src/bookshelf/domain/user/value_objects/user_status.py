from enum import Enum


class UserStatus(str, Enum):
    """Account status.

    pending --(activate)--> active --(deactivate)--> inactive
    """

    PENDING = "pending"
    ACTIVE = "active"
    INACTIVE = "inactive"
