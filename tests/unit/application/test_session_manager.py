"""Unit tests for SessionManager."""

from datetime import timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from bookshelf.application.services import SessionManager
from bookshelf.domain.shared.exceptions import (
    ErrorCode,
    InternalServiceError,
    UnauthorizedError,
)
from bookshelf_auth import SessionCacheError, TokenKind
from bookshelf_auth.persistence import InMemorySessionCache
from tests.shared.fixtures.factories import make_codec


class TestSessionManagerTokens:
    """Tests against a real codec and the in-memory cache."""

    def setup_method(self):
        """Set up test fixtures."""
        self.codec = make_codec()
        self.cache = InMemorySessionCache()
        self.manager = SessionManager(self.codec, self.cache, refresh_ttl_seconds=60)
        self.user_id = uuid4()

    def test_access_token_round_trip(self):
        token = self.manager.create_access_token(self.user_id)
        assert self.manager.verify_access_token(token) == self.user_id

    def test_refresh_token_rejected_as_access(self):
        codec_token = self.codec.issue(TokenKind.REFRESH, self.user_id)
        with pytest.raises(UnauthorizedError, match="Please sign in again."):
            self.manager.verify_access_token(codec_token)

    @pytest.mark.asyncio
    async def test_create_refresh_token_stores_it(self):
        token = await self.manager.create_refresh_token(self.user_id)
        assert await self.cache.get(str(self.user_id)) == token

    @pytest.mark.asyncio
    async def test_verify_current_refresh_token(self):
        token = await self.manager.create_refresh_token(self.user_id)
        assert await self.manager.verify_refresh_token(token) == self.user_id

    @pytest.mark.asyncio
    async def test_new_refresh_token_supersedes_old_one(self):
        old = await self.manager.create_refresh_token(self.user_id)
        new = await self.manager.create_refresh_token(self.user_id)

        with pytest.raises(UnauthorizedError):
            await self.manager.verify_refresh_token(old)
        assert await self.manager.verify_refresh_token(new) == self.user_id

    @pytest.mark.asyncio
    async def test_deleted_refresh_token_is_rejected(self):
        token = await self.manager.create_refresh_token(self.user_id)
        await self.manager.delete_refresh_token(self.user_id)

        with pytest.raises(UnauthorizedError):
            await self.manager.verify_refresh_token(token)

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self):
        await self.manager.delete_refresh_token(self.user_id)
        await self.manager.revoke_all(self.user_id)

    @pytest.mark.asyncio
    async def test_valid_signature_but_not_cached_is_rejected(self):
        token = self.codec.issue(TokenKind.REFRESH, self.user_id)

        with pytest.raises(UnauthorizedError) as exc_info:
            await self.manager.verify_refresh_token(token)

        assert exc_info.value.code == ErrorCode.INVALID_SESSION

    @pytest.mark.asyncio
    async def test_expired_refresh_token_is_rejected_even_if_cached(self):
        token = self.codec.issue(
            TokenKind.REFRESH,
            self.user_id,
            expires_delta=timedelta(seconds=-1),
        )
        await self.cache.set(str(self.user_id), token, 60)

        with pytest.raises(UnauthorizedError, match="Please sign in again."):
            await self.manager.verify_refresh_token(token)

    @pytest.mark.asyncio
    async def test_access_token_is_not_a_refresh_token(self):
        token = self.manager.create_access_token(self.user_id)
        with pytest.raises(UnauthorizedError):
            await self.manager.verify_refresh_token(token)

    @pytest.mark.asyncio
    async def test_sessions_of_different_users_are_independent(self):
        other_id = uuid4()
        mine = await self.manager.create_refresh_token(self.user_id)
        await self.manager.create_refresh_token(other_id)
        await self.manager.delete_refresh_token(other_id)

        assert await self.manager.verify_refresh_token(mine) == self.user_id

    def test_non_positive_ttl_raises(self):
        with pytest.raises(ValueError):
            SessionManager(self.codec, self.cache, refresh_ttl_seconds=0)


class TestSessionManagerCacheFailures:
    """Cache outages surface as 500 rather than a forced sign-out."""

    def setup_method(self):
        """Set up test fixtures."""
        self.codec = make_codec()
        self.cache = AsyncMock()
        self.manager = SessionManager(self.codec, self.cache)
        self.user_id = uuid4()

    @pytest.mark.asyncio
    async def test_create_refresh_token_cache_down(self):
        self.cache.set.side_effect = SessionCacheError()

        with pytest.raises(InternalServiceError) as exc_info:
            await self.manager.create_refresh_token(self.user_id)

        assert exc_info.value.code == ErrorCode.INTERNAL_ERROR

    @pytest.mark.asyncio
    async def test_delete_refresh_token_cache_down(self):
        self.cache.delete.side_effect = SessionCacheError()
        with pytest.raises(InternalServiceError):
            await self.manager.delete_refresh_token(self.user_id)

    @pytest.mark.asyncio
    async def test_verify_refresh_token_cache_down_is_internal_error(self):
        token = self.codec.issue(TokenKind.REFRESH, self.user_id)
        self.cache.get.side_effect = SessionCacheError()

        with pytest.raises(InternalServiceError) as exc_info:
            await self.manager.verify_refresh_token(token)

        assert exc_info.value.code == ErrorCode.INTERNAL_ERROR

    @pytest.mark.asyncio
    async def test_default_ttl_is_one_day(self):
        self.cache.set.return_value = None
        token = await self.manager.create_refresh_token(self.user_id)
        self.cache.set.assert_awaited_once_with(str(self.user_id), token, 86400)

    @pytest.mark.asyncio
    async def test_invalid_token_never_reaches_cache(self):
        with pytest.raises(UnauthorizedError):
            await self.manager.verify_refresh_token("garbage")
        self.cache.get.assert_not_called()
