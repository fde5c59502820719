"""Unit tests for UserService."""

from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest

from bookshelf.application.services import UserService
from bookshelf.domain.shared.exceptions import (
    ErrorCode,
    UnauthorizedError,
    ValidationError,
)
from bookshelf.domain.user import (
    EmailAlreadyExistsError,
    UserNotFoundError,
    UserRole,
    UserStatus,
)
from bookshelf_auth import PasswordHashingService, WeakPasswordError
from tests.shared.fixtures.factories import (
    TEST_EMAIL,
    TEST_PASSWORD,
    TEST_USER_ID,
    make_user,
)


class UserServiceTestBase:
    def setup_method(self):
        """Set up test fixtures."""
        self.user_repo = AsyncMock()
        self.password_service = Mock(spec=PasswordHashingService)
        self.sessions = AsyncMock()

        self.service = UserService(
            user_repository=self.user_repo,
            password_service=self.password_service,
            session_manager=self.sessions,
        )

        self.user = make_user()
        self.user_repo.find_by_id.return_value = self.user


class TestProfile(UserServiceTestBase):
    """Tests for reading and updating the profile."""

    @pytest.mark.asyncio
    async def test_get_user_missing_raises(self):
        self.user_repo.find_by_id.return_value = None

        with pytest.raises(UserNotFoundError) as exc_info:
            await self.service.get_user(uuid4())

        assert exc_info.value.message == "User does not exist, please check the user ID."

    @pytest.mark.asyncio
    async def test_update_profile(self):
        user = await self.service.update_profile(TEST_USER_ID, name="Augusta")

        assert user.name == "Augusta"
        assert user.surname == "Lovelace"
        self.user_repo.save.assert_awaited_once_with(self.user)


class TestChangeEmail(UserServiceTestBase):
    """Tests for email changes."""

    @pytest.mark.asyncio
    async def test_change_email(self):
        self.password_service.verify.return_value = True
        self.user_repo.find_by_email.return_value = None

        user = await self.service.change_email(
            TEST_USER_ID,
            old_email=TEST_EMAIL,
            new_email="augusta@example.com",
            password=TEST_PASSWORD,
        )

        assert user.email == "augusta@example.com"
        self.user_repo.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_wrong_old_email(self):
        self.password_service.verify.return_value = True

        with pytest.raises(UnauthorizedError, match="Invalid email or password."):
            await self.service.change_email(
                TEST_USER_ID,
                old_email="someone@example.com",
                new_email="augusta@example.com",
                password=TEST_PASSWORD,
            )

    @pytest.mark.asyncio
    async def test_wrong_password(self):
        self.password_service.verify.return_value = False

        with pytest.raises(UnauthorizedError) as exc_info:
            await self.service.change_email(
                TEST_USER_ID,
                old_email=TEST_EMAIL,
                new_email="augusta@example.com",
                password="wrong",
            )

        assert exc_info.value.code == ErrorCode.INVALID_CREDENTIALS
        self.user_repo.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_new_email_taken_by_someone_else(self):
        self.password_service.verify.return_value = True
        self.user_repo.find_by_email.return_value = make_user(
            email="taken@example.com",
            user_id=uuid4(),
        )

        with pytest.raises(EmailAlreadyExistsError):
            await self.service.change_email(
                TEST_USER_ID,
                old_email=TEST_EMAIL,
                new_email="taken@example.com",
                password=TEST_PASSWORD,
            )

    @pytest.mark.asyncio
    async def test_same_email_is_a_no_op(self):
        self.password_service.verify.return_value = True

        await self.service.change_email(
            TEST_USER_ID,
            old_email=TEST_EMAIL,
            new_email=TEST_EMAIL.upper(),
            password=TEST_PASSWORD,
        )

        self.user_repo.save.assert_not_called()


class TestChangePassword(UserServiceTestBase):
    """Tests for password changes."""

    @pytest.mark.asyncio
    async def test_change_password_revokes_session(self):
        self.password_service.verify.return_value = True
        self.password_service.hash.return_value = "new_hash"

        user = await self.service.change_password(
            TEST_USER_ID,
            old_password=TEST_PASSWORD,
            new_password="brand-new-pass",
        )

        assert user.password_hash == "new_hash"
        self.sessions.revoke_all.assert_awaited_once_with(TEST_USER_ID)

    @pytest.mark.asyncio
    async def test_wrong_old_password(self):
        self.password_service.verify.return_value = False

        with pytest.raises(UnauthorizedError, match="Old password is incorrect."):
            await self.service.change_password(
                TEST_USER_ID,
                old_password="wrong",
                new_password="brand-new-pass",
            )

        self.sessions.revoke_all.assert_not_called()

    @pytest.mark.asyncio
    async def test_weak_new_password(self):
        self.password_service.verify.return_value = True
        self.password_service.hash.side_effect = WeakPasswordError("Too short")

        with pytest.raises(ValidationError):
            await self.service.change_password(
                TEST_USER_ID,
                old_password=TEST_PASSWORD,
                new_password="123",
            )


class TestDeactivateAndRoles(UserServiceTestBase):
    """Tests for deactivation and role changes."""

    @pytest.mark.asyncio
    async def test_deactivate_revokes_session(self):
        await self.service.deactivate(TEST_USER_ID)

        assert self.user.status == UserStatus.INACTIVE
        self.sessions.revoke_all.assert_awaited_once_with(TEST_USER_ID)

    @pytest.mark.asyncio
    async def test_deactivate_twice_fails(self):
        await self.service.deactivate(TEST_USER_ID)
        with pytest.raises(UnauthorizedError):
            await self.service.deactivate(TEST_USER_ID)

    @pytest.mark.asyncio
    async def test_set_role(self):
        self.user_repo.find_by_email.return_value = self.user

        user = await self.service.set_role(TEST_EMAIL, UserRole.ADMIN)

        assert user.is_admin
        self.user_repo.save.assert_awaited_once_with(self.user)

    @pytest.mark.asyncio
    async def test_set_role_unknown_email(self):
        self.user_repo.find_by_email.return_value = None
        with pytest.raises(UserNotFoundError):
            await self.service.set_role("nobody@example.com", UserRole.ADMIN)

    @pytest.mark.asyncio
    async def test_works_without_session_manager(self):
        service = UserService(self.user_repo, self.password_service)
        await service.deactivate(TEST_USER_ID)
        assert self.user.status == UserStatus.INACTIVE
