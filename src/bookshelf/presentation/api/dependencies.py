"""FastAPI dependency injection for the Bookshelf API.

Provides dependencies for:
- Database sessions
- Authentication (identity from the bearer access token)
- Role and ownership checks
- Service instances
- Per-client rate limits
"""

import logging
from dataclasses import dataclass
from typing import Annotated, AsyncGenerator, Awaitable, Callable
from uuid import UUID

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bookshelf.application.dtos.pagination import PageRequest
from bookshelf.application.services import (
    AuthorService,
    BookService,
    IdentityService,
    PublisherService,
    SessionManager,
    UserService,
)
from bookshelf.application.services.session_service import SIGN_IN_AGAIN_MESSAGE
from bookshelf.domain.shared.exceptions import (
    ErrorCode,
    ForbiddenError,
    InternalServiceError,
    UnauthorizedError,
)
from bookshelf.domain.user import UserRole
from bookshelf.infrastructure.persistence.sqlalchemy.repositories import (
    AuthorRepositorySQLAlchemy,
    BookRepositorySQLAlchemy,
    PublisherRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)
from bookshelf.presentation.api.container import AppContainer
from bookshelf.presentation.api.rate_limit import RateLimitBucket

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


Container = Annotated[AppContainer, Depends(get_container)]


# -----------------------------------------------------------------------------
# Database Session
# -----------------------------------------------------------------------------


async def get_db_session(
    container: Container,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    Routers commit explicitly; anything uncommitted is rolled back on close.

    Yields
    ------
    AsyncSession for database operations
    """
    async with container.session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# -----------------------------------------------------------------------------
# Services
# -----------------------------------------------------------------------------


def get_session_manager(container: Container) -> SessionManager:
    return SessionManager(
        token_codec=container.token_codec,
        session_cache=container.session_cache,
        refresh_ttl_seconds=container.settings.refresh_token_cache_ttl_seconds,
    )


SessionManagerDep = Annotated[SessionManager, Depends(get_session_manager)]


def get_identity_service(
    container: Container,
    session: DBSession,
    session_manager: SessionManagerDep,
) -> IdentityService:
    return IdentityService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=container.password_service,
        session_manager=session_manager,
    )


def get_user_service(
    container: Container,
    session: DBSession,
    session_manager: SessionManagerDep,
) -> UserService:
    return UserService(
        user_repository=UserRepositorySQLAlchemy(session),
        password_service=container.password_service,
        session_manager=session_manager,
    )


def get_author_service(session: DBSession) -> AuthorService:
    return AuthorService(
        author_repository=AuthorRepositorySQLAlchemy(session),
        book_repository=BookRepositorySQLAlchemy(session),
    )


def get_publisher_service(session: DBSession) -> PublisherService:
    return PublisherService(
        publisher_repository=PublisherRepositorySQLAlchemy(session),
        book_repository=BookRepositorySQLAlchemy(session),
    )


def get_book_service(session: DBSession) -> BookService:
    return BookService(
        book_repository=BookRepositorySQLAlchemy(session),
        author_repository=AuthorRepositorySQLAlchemy(session),
        publisher_repository=PublisherRepositorySQLAlchemy(session),
    )


IdentityServiceDep = Annotated[IdentityService, Depends(get_identity_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
AuthorServiceDep = Annotated[AuthorService, Depends(get_author_service)]
PublisherServiceDep = Annotated[PublisherService, Depends(get_publisher_service)]
BookServiceDep = Annotated[BookService, Depends(get_book_service)]


# -----------------------------------------------------------------------------
# Authentication & Authorization
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class AuthenticatedIdentity:
    """Who is calling: the verified subject of the access token."""

    user_id: UUID
    token: str


async def require_signed_in(
    request: Request,
    session_manager: SessionManagerDep,
    credentials: Annotated[
        HTTPAuthorizationCredentials | None,
        Depends(security),
    ] = None,
) -> AuthenticatedIdentity:
    """
    Authenticate the request from its bearer access token.

    Raises
    ------
    UnauthorizedError
        "Please log in." when no Authorization header is sent,
        "Please sign in again." when it is malformed or the token does
        not verify
    """
    if not request.headers.get("Authorization"):
        raise UnauthorizedError("Please log in.", code=ErrorCode.UNAUTHORIZED)

    if credentials is None or not credentials.credentials:
        raise UnauthorizedError(SIGN_IN_AGAIN_MESSAGE, code=ErrorCode.INVALID_SESSION)

    user_id = session_manager.verify_access_token(credentials.credentials)
    return AuthenticatedIdentity(user_id=user_id, token=credentials.credentials)


CurrentIdentity = Annotated[AuthenticatedIdentity, Depends(require_signed_in)]


def require_role(
    role: UserRole,
) -> Callable[..., Awaitable[AuthenticatedIdentity]]:
    """
    Build a dependency that admits only signed-in users holding ``role``.

    The user is loaded fresh from the database, so a demotion takes effect
    on the next request rather than when the access token expires.
    """

    async def dependency(
        identity: CurrentIdentity,
        session: DBSession,
    ) -> AuthenticatedIdentity:
        try:
            user = await UserRepositorySQLAlchemy(session).find_by_id(identity.user_id)
        except SQLAlchemyError as e:
            logger.exception("Role lookup failed for user %s", identity.user_id)
            raise InternalServiceError(
                "An error occurred while verifying your authorization.",
            ) from e

        if user is None or user.role != role:
            raise UnauthorizedError(
                "You are not authorized to perform this action.",
                code=ErrorCode.NOT_AUTHORIZED,
            )
        return identity

    return dependency


require_admin = require_role(UserRole.ADMIN)

AdminIdentity = Annotated[AuthenticatedIdentity, Depends(require_admin)]


def ensure_owner(identity: AuthenticatedIdentity, user_id: UUID) -> None:
    """Reject a caller acting on another user's resource with a 403."""
    if identity.user_id != user_id:
        raise ForbiddenError()


# -----------------------------------------------------------------------------
# Pagination
# -----------------------------------------------------------------------------


def get_page_request(
    current_page: Annotated[str | None, Query(alias="currentPage")] = None,
    per_page: Annotated[str | None, Query(alias="perPage")] = None,
) -> PageRequest:
    """Read ``currentPage``/``perPage``; anything unusable falls back to 1/10."""
    return PageRequest.normalize(current_page, per_page)


PageRequestDep = Annotated[PageRequest, Depends(get_page_request)]


# -----------------------------------------------------------------------------
# Rate Limiting
# -----------------------------------------------------------------------------


def client_address(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def rate_limit(bucket: RateLimitBucket) -> Callable[..., Awaitable[None]]:
    """Create a dependency that counts the request against ``bucket``.

    Used in ``dependencies=[...]`` of a route or a router.
    """

    async def dependency(request: Request, container: Container) -> None:
        await container.rate_limiter.hit(bucket, client_address(request))

    return dependency


AuthRateLimit = Depends(rate_limit(RateLimitBucket.AUTH))
DatabaseRateLimit = Depends(rate_limit(RateLimitBucket.DATABASE))
CommonRateLimit = Depends(rate_limit(RateLimitBucket.COMMON))
