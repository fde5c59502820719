"""Authentication schemas for request/response models."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from bookshelf.presentation.api.schemas.common import NonEmptyStr


class SignupRequest(BaseModel):
    """Request schema for user registration."""

    name: NonEmptyStr
    surname: NonEmptyStr
    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(
        ...,
        min_length=6,
        description="Password (at least 6 characters)",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "name": "Ada",
                "surname": "Lovelace",
                "email": "ada@example.com",
                "password": "analytical-engine",
            },
        },
    )


class CredentialsRequest(BaseModel):
    """Request schema for signin and activation."""

    email: EmailStr
    password: str = Field(..., min_length=1)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "ada@example.com",
                "password": "analytical-engine",
            },
        },
    )


class RefreshTokenRequest(BaseModel):
    """Request schema for refresh and signout."""

    refresh_token: str = Field(..., alias="refreshToken", min_length=1)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {"refreshToken": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9..."},
        },
    )


class SignupResponse(BaseModel):
    user_id: UUID = Field(..., alias="userID")
    email: str

    model_config = ConfigDict(populate_by_name=True)


class TokenPairResponse(BaseModel):
    """Response schema for signin and refresh."""

    user_id: UUID = Field(..., alias="userID")
    access_token: str
    refresh_token: str

    model_config = ConfigDict(populate_by_name=True)
