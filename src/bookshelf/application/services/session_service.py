"""Session manager: token issuance, rotation and revocation."""

from __future__ import annotations

import hmac
import logging
from typing import TYPE_CHECKING, Union
from uuid import UUID

from bookshelf.domain.shared.exceptions import (
    ErrorCode,
    InternalServiceError,
    UnauthorizedError,
)
from bookshelf_auth import InvalidTokenError, SessionCacheError, TokenKind

if TYPE_CHECKING:
    from bookshelf_auth import SessionCache, TokenCodec

logger = logging.getLogger(__name__)

SIGN_IN_AGAIN_MESSAGE = "Please sign in again."
DEFAULT_REFRESH_TTL_SECONDS = 86400


class SessionManager:
    """
    Owns the single live refresh token of each user.

    The session cache maps ``user id -> refresh token``. Issuing a refresh
    token overwrites the previous one, so at most one refresh token per user
    is accepted at any time. Signout deletes the entry.

    Concurrent refreshes for the same user are not serialized: the last
    write wins and the other caller's new refresh token stops verifying.
    """

    def __init__(
        self,
        token_codec: TokenCodec,
        session_cache: SessionCache,
        refresh_ttl_seconds: int = DEFAULT_REFRESH_TTL_SECONDS,
    ):
        if refresh_ttl_seconds <= 0:
            msg = "refresh_ttl_seconds must be positive"
            raise ValueError(msg)
        self._codec = token_codec
        self._cache = session_cache
        self._refresh_ttl = refresh_ttl_seconds

    def create_access_token(self, user_id: Union[UUID, str]) -> str:
        try:
            return self._codec.issue(TokenKind.ACCESS, user_id)
        except (TypeError, ValueError) as e:
            logger.exception("Failed to sign access token")
            raise InternalServiceError(
                "Unable to create the access token at the moment.",
            ) from e

    async def create_refresh_token(self, user_id: Union[UUID, str]) -> str:
        """Issue a refresh token and make it the user's only valid one."""
        try:
            token = self._codec.issue(TokenKind.REFRESH, user_id)
        except (TypeError, ValueError) as e:
            logger.exception("Failed to sign refresh token")
            raise InternalServiceError(
                "Unable to create the refresh token at the moment.",
            ) from e

        try:
            await self._cache.set(str(user_id), token, self._refresh_ttl)
        except SessionCacheError as e:
            logger.exception("Failed to store refresh token for user %s", user_id)
            raise InternalServiceError(
                "Unable to create the refresh token at the moment.",
                details={"user_id": str(user_id)},
            ) from e

        return token

    def verify_access_token(self, token: str) -> UUID:
        try:
            payload = self._codec.verify(TokenKind.ACCESS, token)
            return UUID(payload.subject)
        except (InvalidTokenError, ValueError) as e:
            raise UnauthorizedError(
                SIGN_IN_AGAIN_MESSAGE,
                code=ErrorCode.INVALID_SESSION,
            ) from e

    async def verify_refresh_token(self, token: str) -> UUID:
        """
        Verify a refresh token and check it is the user's current one.

        Returns
        -------
        The user id the token was issued to

        Raises
        ------
        UnauthorizedError
            When the token is malformed, expired, superseded or signed out
        InternalServiceError
            When the session cache cannot be reached
        """
        try:
            payload = self._codec.verify(TokenKind.REFRESH, token)
            user_id = UUID(payload.subject)
            cached = await self._cache.get(payload.subject)
        except SessionCacheError as e:
            logger.exception("Session cache lookup failed during refresh")
            raise InternalServiceError(
                "Unable to verify the session at the moment.",
            ) from e
        except (InvalidTokenError, ValueError) as e:
            logger.debug("Refresh token rejected")
            raise self._sign_in_again() from e

        if cached is None or not hmac.compare_digest(
            cached.encode("utf-8"),
            token.encode("utf-8"),
        ):
            logger.debug("Refresh token is not the current session")
            raise self._sign_in_again()

        return user_id

    async def delete_refresh_token(self, user_id: Union[UUID, str]) -> None:
        """Drop the user's refresh token. Deleting a missing entry is a no-op."""
        try:
            await self._cache.delete(str(user_id))
        except SessionCacheError as e:
            logger.exception("Failed to delete refresh token for user %s", user_id)
            raise InternalServiceError(
                "Unable to delete the refresh token at the moment.",
                details={"user_id": str(user_id)},
            ) from e

    async def revoke_all(self, user_id: Union[UUID, str]) -> None:
        """Revoke every session of the user (there is at most one)."""
        await self.delete_refresh_token(user_id)

    @staticmethod
    def _sign_in_again() -> UnauthorizedError:
        return UnauthorizedError(SIGN_IN_AGAIN_MESSAGE, code=ErrorCode.INVALID_SESSION)
