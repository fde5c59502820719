"""User domain exceptions."""

from bookshelf.domain.shared.exceptions import (
    BusinessRuleViolation,
    EntityNotFoundError,
    ErrorCode,
    UnauthorizedError,
    ValidationError,
)


class InvalidEmailError(ValidationError):
    """Raised when an email address is malformed."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code=ErrorCode.INVALID_EMAIL)


class EmailAlreadyExistsError(BusinessRuleViolation):
    """Email already registered."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            "User already exists with the provided email.",
            code=ErrorCode.EMAIL_ALREADY_EXISTS,
            details={"email": email},
        )


class UserNotFoundError(EntityNotFoundError):
    """User not found."""

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(
            "User does not exist, please check the user ID.",
            code=ErrorCode.USER_NOT_FOUND,
            details={"user_id": user_id},
        )


class InvalidStatusTransitionError(UnauthorizedError):
    """Raised when a status change is not allowed from the current status."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNAUTHORIZED) -> None:
        super().__init__(message, code=code)
