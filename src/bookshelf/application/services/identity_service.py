"""Identity lifecycle: signup, activation, signin, refresh and signout."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from bookshelf.application.dtos.auth import SignupCommand, SignupResult, TokenPair
from bookshelf.domain.shared.exceptions import (
    ErrorCode,
    UnauthorizedError,
    ValidationError,
)
from bookshelf.domain.user import (
    Email,
    EmailAlreadyExistsError,
    InvalidEmailError,
    User,
)
from bookshelf.domain.user.aggregates.user import INVALID_CREDENTIALS_MESSAGE
from bookshelf_auth import WeakPasswordError

if TYPE_CHECKING:
    from bookshelf.application.services.session_service import SessionManager
    from bookshelf.domain.user import UserRepository
    from bookshelf_auth import PasswordHashingService

logger = logging.getLogger(__name__)


class IdentityService:
    """
    Application service for the user account lifecycle.

    Orchestrates the user repository, password hashing and the session
    manager:
    - signup creates a ``pending`` user (no tokens)
    - activate moves ``pending`` to ``active`` (no tokens)
    - signin checks credentials and status, then opens a session
    - refresh rotates the session
    - signout closes the session

    Unknown email and wrong password produce the same error and cost the
    same bcrypt check, so callers cannot tell which addresses are registered.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        session_manager: SessionManager,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._sessions = session_manager

    async def signup(self, command: SignupCommand) -> SignupResult:
        email = Email(command.email)
        if await self._user_repo.exists_by_email(email):
            raise EmailAlreadyExistsError(email.value)

        password_hash = await self.hash_password(command.password)

        user = User.create(
            name=command.name,
            surname=command.surname,
            email=email,
            password_hash=password_hash,
        )
        # A concurrent signup with the same email surfaces here as
        # EmailAlreadyExistsError from the unique index.
        await self._user_repo.save(user)

        logger.info("User signed up: %s", user.id)
        return SignupResult(user_id=user.id, email=user.email)

    async def activate(self, email: str, password: str) -> None:
        user = await self._authenticate(email, password)
        user.activate()
        await self._user_repo.save(user)
        logger.info("User activated: %s", user.id)

    async def signin(self, email: str, password: str) -> TokenPair:
        user = await self._authenticate(email, password)
        user.ensure_can_sign_in()
        await self._rehash_if_needed(user, password)

        access_token = self._sessions.create_access_token(user.id)
        refresh_token = await self._sessions.create_refresh_token(user.id)

        logger.info("User signed in: %s", user.id)
        return TokenPair(
            user_id=user.id,
            access_token=access_token,
            refresh_token=refresh_token,
        )

    async def refresh(self, refresh_token: str) -> TokenPair:
        user_id = await self._sessions.verify_refresh_token(refresh_token)

        access_token = self._sessions.create_access_token(user_id)
        new_refresh_token = await self._sessions.create_refresh_token(user_id)

        logger.debug("Tokens refreshed for user: %s", user_id)
        return TokenPair(
            user_id=user_id,
            access_token=access_token,
            refresh_token=new_refresh_token,
        )

    async def signout(self, refresh_token: str) -> None:
        user_id = await self._sessions.verify_refresh_token(refresh_token)
        await self._sessions.delete_refresh_token(user_id)
        logger.info("User signed out: %s", user_id)

    async def verify_credentials(self, user: User, password: str) -> bool:
        return await asyncio.to_thread(
            self._password_service.verify,
            password,
            user.password_hash,
        )

    async def hash_password(self, password: str) -> str:
        """Hash off the event loop; weak passwords become a 400."""
        try:
            return await asyncio.to_thread(self._password_service.hash, password)
        except WeakPasswordError as e:
            raise ValidationError(e.message, code=ErrorCode.WEAK_PASSWORD) from e

    async def _rehash_if_needed(self, user: User, password: str) -> None:
        """Upgrade a stored hash made with a different bcrypt cost."""
        if not self._password_service.needs_rehash(user.password_hash):
            return
        try:
            new_hash = await asyncio.to_thread(self._password_service.hash, password)
        except WeakPasswordError:
            logger.debug("Skipping rehash of a password below the current policy")
            return
        user.change_password_hash(new_hash)
        await self._user_repo.save(user)
        logger.info("Password hash upgraded for user: %s", user.id)

    async def _authenticate(self, email: str, password: str) -> User:
        try:
            user = await self._user_repo.find_by_email(email)
        except InvalidEmailError:
            user = None

        if user is None:
            await asyncio.to_thread(self._password_service.verify_dummy, password)

        if user is None or not await self.verify_credentials(user, password):
            logger.info("Rejected credentials")
            raise UnauthorizedError(
                INVALID_CREDENTIALS_MESSAGE,
                code=ErrorCode.INVALID_CREDENTIALS,
            )
        return user
