"""Authentication router: signup, activation, signin, refresh and signout."""

import logging

from fastapi import APIRouter, Response, status

from bookshelf.application.dtos.auth import SignupCommand
from bookshelf.presentation.api.dependencies import (
    AuthRateLimit,
    DBSession,
    IdentityServiceDep,
)
from bookshelf.presentation.api.schemas.auth import (
    CredentialsRequest,
    RefreshTokenRequest,
    SignupRequest,
    SignupResponse,
    TokenPairResponse,
)
from bookshelf.presentation.api.schemas.common import ErrorResponse, MessageResponse

logger = logging.getLogger(__name__)

_UNAUTHORIZED = {401: {"model": ErrorResponse, "description": "Not authenticated"}}
_THROTTLED = {429: {"model": ErrorResponse, "description": "Too many requests"}}

router = APIRouter(dependencies=[AuthRateLimit], responses=_THROTTLED)


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered, pending activation"},
        400: {"model": ErrorResponse, "description": "Weak password"},
        422: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def signup(
    request: SignupRequest,
    identity_service: IdentityServiceDep,
    session: DBSession,
) -> SignupResponse:
    """
    Register a new account.

    The account starts ``pending`` and cannot sign in until it is activated.
    """
    result = await identity_service.signup(
        SignupCommand(
            name=request.name,
            surname=request.surname,
            email=request.email,
            password=request.password,
        ),
    )
    await session.commit()
    return SignupResponse(user_id=result.user_id, email=result.email)


@router.put(
    "/activate",
    summary="Activate a pending account",
    responses=_UNAUTHORIZED,
)
async def activate(
    request: CredentialsRequest,
    identity_service: IdentityServiceDep,
    session: DBSession,
) -> MessageResponse:
    await identity_service.activate(request.email, request.password)
    await session.commit()
    return MessageResponse(message="User activated successfully.")


@router.post(
    "/signin",
    summary="Sign in and open a session",
    responses=_UNAUTHORIZED,
)
async def signin(
    request: CredentialsRequest,
    identity_service: IdentityServiceDep,
    session: DBSession,
) -> TokenPairResponse:
    """
    Exchange email and password for an access and a refresh token.

    A new signin replaces any refresh token issued earlier. A password
    hash made with an outdated bcrypt cost is upgraded on the way.
    """
    pair = await identity_service.signin(request.email, request.password)
    await session.commit()
    return TokenPairResponse(
        user_id=pair.user_id,
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
    )


@router.put(
    "/refresh",
    summary="Rotate the session tokens",
    responses=_UNAUTHORIZED,
)
async def refresh(
    request: RefreshTokenRequest,
    identity_service: IdentityServiceDep,
) -> TokenPairResponse:
    """The presented refresh token stops working once this succeeds."""
    pair = await identity_service.refresh(request.refresh_token)
    return TokenPairResponse(
        user_id=pair.user_id,
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
    )


@router.delete(
    "/signout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Sign out and end the session",
    responses=_UNAUTHORIZED,
)
async def signout(
    request: RefreshTokenRequest,
    identity_service: IdentityServiceDep,
) -> Response:
    await identity_service.signout(request.refresh_token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
