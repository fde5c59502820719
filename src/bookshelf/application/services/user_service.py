"""Self-service account management."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Optional
from uuid import UUID

from bookshelf.domain.shared.exceptions import (
    ErrorCode,
    UnauthorizedError,
    ValidationError,
)
from bookshelf.domain.user import (
    Email,
    EmailAlreadyExistsError,
    User,
    UserNotFoundError,
    UserRole,
)
from bookshelf.domain.user.aggregates.user import INVALID_CREDENTIALS_MESSAGE
from bookshelf_auth import WeakPasswordError

if TYPE_CHECKING:
    from bookshelf.application.services.session_service import SessionManager
    from bookshelf.domain.user import UserRepository
    from bookshelf_auth import PasswordHashingService

logger = logging.getLogger(__name__)


class UserService:
    """Profile, email, password and deactivation for a single user.

    Ownership (caller == user) is checked by the presentation layer before
    any of these run.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        password_service: PasswordHashingService,
        session_manager: Optional[SessionManager] = None,
    ):
        self._user_repo = user_repository
        self._password_service = password_service
        self._sessions = session_manager

    async def get_user(self, user_id: UUID) -> User:
        user = await self._user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(str(user_id))
        return user

    async def update_profile(
        self,
        user_id: UUID,
        name: Optional[str] = None,
        surname: Optional[str] = None,
    ) -> User:
        user = await self.get_user(user_id)
        user.update_profile(name=name, surname=surname)
        await self._user_repo.save(user)
        return user

    async def change_email(
        self,
        user_id: UUID,
        old_email: str,
        new_email: str,
        password: str,
    ) -> User:
        user = await self.get_user(user_id)

        if Email(old_email) != user.email_obj or not await self._verify(user, password):
            raise UnauthorizedError(
                INVALID_CREDENTIALS_MESSAGE,
                code=ErrorCode.INVALID_CREDENTIALS,
            )

        target = Email(new_email)
        if target == user.email_obj:
            return user

        existing = await self._user_repo.find_by_email(target)
        if existing is not None and existing.id != user.id:
            raise EmailAlreadyExistsError(target.value)

        user.change_email(target)
        await self._user_repo.save(user)
        logger.info("Email changed for user: %s", user.id)
        return user

    async def change_password(
        self,
        user_id: UUID,
        old_password: str,
        new_password: str,
    ) -> User:
        """Replace the password and end the user's session."""
        user = await self.get_user(user_id)

        if not await self._verify(user, old_password):
            raise UnauthorizedError(
                "Old password is incorrect.",
                code=ErrorCode.INVALID_CREDENTIALS,
            )

        try:
            new_hash = await asyncio.to_thread(self._password_service.hash, new_password)
        except WeakPasswordError as e:
            raise ValidationError(e.message, code=ErrorCode.WEAK_PASSWORD) from e

        user.change_password_hash(new_hash)
        await self._user_repo.save(user)
        await self._revoke(user.id)

        logger.info("Password changed for user: %s", user.id)
        return user

    async def deactivate(self, user_id: UUID) -> None:
        user = await self.get_user(user_id)
        user.deactivate()
        await self._user_repo.save(user)
        await self._revoke(user.id)
        logger.info("User deactivated: %s", user.id)

    async def set_role(self, email: str, role: UserRole) -> User:
        user = await self._user_repo.find_by_email(email)
        if user is None:
            raise UserNotFoundError(email)

        if role == UserRole.ADMIN:
            user.promote_to_admin()
        else:
            user.demote_to_user()
        await self._user_repo.save(user)

        logger.info("Role of user %s set to %s", user.id, role.value)
        return user

    async def _verify(self, user: User, password: str) -> bool:
        return await asyncio.to_thread(
            self._password_service.verify,
            password,
            user.password_hash,
        )

    async def _revoke(self, user_id: UUID) -> None:
        if self._sessions is not None:
            await self._sessions.revoke_all(user_id)
