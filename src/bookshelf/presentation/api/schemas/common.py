"""Common schemas shared across API endpoints."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints

NonEmptyStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=100),
]


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(..., description="Error message")
    code: str | None = Field(None, description="Error code for programmatic handling")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"detail": "Please sign in again.", "code": "INVALID_SESSION"},
        },
    )


class MessageResponse(BaseModel):
    message: str


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
    session_cache: str = Field(..., description="Session cache status")


class PaginatedResponse(BaseModel):
    """Pagination fields shared by every list response."""

    current_page: int = Field(..., alias="currentPage")
    per_page: int = Field(..., alias="perPage")
    total_pages: int = Field(..., alias="totalPages")

    model_config = ConfigDict(populate_by_name=True)
