"""User profile schemas."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from bookshelf.domain.user import User
from bookshelf.presentation.api.schemas.common import NonEmptyStr


class UserResponse(BaseModel):
    """Public profile. Never includes the password hash."""

    id: UUID
    name: str
    surname: str
    email: str
    role: str
    status: str
    created_at: datetime = Field(..., alias="createdAt")

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_domain(cls, user: User) -> "UserResponse":
        return cls(
            id=user.id,
            name=user.name,
            surname=user.surname,
            email=user.email,
            role=user.role.value,
            status=user.status.value,
            created_at=user.created_at,
        )


class UpdateUserRequest(BaseModel):
    name: Optional[NonEmptyStr] = None
    surname: Optional[NonEmptyStr] = None


class UpdateEmailRequest(BaseModel):
    old_email: EmailStr = Field(..., alias="oldEmail")
    new_email: EmailStr = Field(..., alias="newEmail")
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(populate_by_name=True)


class UpdatePasswordRequest(BaseModel):
    old_password: str = Field(..., alias="oldPassword", min_length=1)
    new_password: str = Field(..., alias="newPassword", min_length=6)

    model_config = ConfigDict(populate_by_name=True)
