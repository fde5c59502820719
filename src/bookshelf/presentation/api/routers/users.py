"""User profile router.

Every endpoint requires a signed-in caller; changes are only allowed on
the caller's own account.
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Response, status

from bookshelf.presentation.api.dependencies import (
    CommonRateLimit,
    CurrentIdentity,
    DatabaseRateLimit,
    DBSession,
    ensure_owner,
    UserServiceDep,
)
from bookshelf.presentation.api.schemas.common import ErrorResponse
from bookshelf.presentation.api.schemas.users import (
    UpdateEmailRequest,
    UpdatePasswordRequest,
    UpdateUserRequest,
    UserResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

_OWNER_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Not authenticated"},
    403: {"model": ErrorResponse, "description": "Not the account owner"},
    404: {"model": ErrorResponse, "description": "User not found"},
}


@router.get(
    "/{user_id}",
    summary="Get a user profile",
    responses={404: {"model": ErrorResponse, "description": "User not found"}},
    dependencies=[CommonRateLimit],
)
async def get_user(
    user_id: UUID,
    _: CurrentIdentity,
    user_service: UserServiceDep,
) -> UserResponse:
    user = await user_service.get_user(user_id)
    return UserResponse.from_domain(user)


@router.put(
    "/{user_id}",
    summary="Update name and surname",
    responses=_OWNER_RESPONSES,
    dependencies=[DatabaseRateLimit],
)
async def update_user(
    user_id: UUID,
    request: UpdateUserRequest,
    identity: CurrentIdentity,
    user_service: UserServiceDep,
    session: DBSession,
) -> UserResponse:
    ensure_owner(identity, user_id)
    user = await user_service.update_profile(
        user_id,
        name=request.name,
        surname=request.surname,
    )
    await session.commit()
    return UserResponse.from_domain(user)


@router.patch(
    "/{user_id}/email",
    summary="Change the account email",
    responses=_OWNER_RESPONSES,
    dependencies=[DatabaseRateLimit],
)
async def update_email(
    user_id: UUID,
    request: UpdateEmailRequest,
    identity: CurrentIdentity,
    user_service: UserServiceDep,
    session: DBSession,
) -> UserResponse:
    ensure_owner(identity, user_id)
    user = await user_service.change_email(
        user_id,
        old_email=request.old_email,
        new_email=request.new_email,
        password=request.password,
    )
    await session.commit()
    return UserResponse.from_domain(user)


@router.patch(
    "/{user_id}/password",
    summary="Change the account password",
    responses=_OWNER_RESPONSES,
    dependencies=[DatabaseRateLimit],
)
async def update_password(
    user_id: UUID,
    request: UpdatePasswordRequest,
    identity: CurrentIdentity,
    user_service: UserServiceDep,
    session: DBSession,
) -> UserResponse:
    """Changing the password also ends the current session."""
    ensure_owner(identity, user_id)
    user = await user_service.change_password(
        user_id,
        old_password=request.old_password,
        new_password=request.new_password,
    )
    await session.commit()
    return UserResponse.from_domain(user)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Deactivate the account",
    responses=_OWNER_RESPONSES,
    dependencies=[DatabaseRateLimit],
)
async def deactivate_user(
    user_id: UUID,
    identity: CurrentIdentity,
    user_service: UserServiceDep,
    session: DBSession,
) -> Response:
    ensure_owner(identity, user_id)
    await user_service.deactivate(user_id)
    await session.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
