"""Shared domain building blocks."""

from bookshelf.domain.shared.exceptions import (
    BusinessRuleViolation,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ForbiddenError,
    InternalServiceError,
    TooManyRequestsError,
    UnauthorizedError,
    ValidationError,
)
from bookshelf.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "BusinessRuleViolation",
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "ForbiddenError",
    "InternalServiceError",
    "TooManyRequestsError",
    "UnauthorizedError",
    "ValidationError",
    "ensure_tz_aware",
    "utc_now",
]
