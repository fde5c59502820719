"""Unit tests for require_signed_in, require_role and ensure_owner."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from bookshelf.domain.shared.exceptions import ForbiddenError
from bookshelf.domain.user import UserRole
from bookshelf.presentation.api import dependencies
from bookshelf.presentation.api.dependencies import (
    AdminIdentity,
    AuthenticatedIdentity,
    CurrentIdentity,
    ensure_owner,
    get_db_session,
)
from bookshelf.presentation.api.exception_handlers import setup_exception_handlers
from bookshelf_auth import TokenKind
from bookshelf_auth.persistence import InMemorySessionCache
from tests.shared.fixtures.factories import make_codec, make_user


@pytest.fixture
def codec():
    return make_codec()


@pytest.fixture
def user_repo(monkeypatch):
    """Replace the SQLAlchemy user repository used by require_role."""
    repo = AsyncMock()
    monkeypatch.setattr(
        dependencies,
        "UserRepositorySQLAlchemy",
        Mock(return_value=repo),
    )
    return repo


@pytest.fixture
def client(codec):
    app = FastAPI()
    setup_exception_handlers(app)
    app.state.container = SimpleNamespace(
        token_codec=codec,
        session_cache=InMemorySessionCache(),
        settings=SimpleNamespace(refresh_token_cache_ttl_seconds=60),
    )

    async def no_db_session():
        yield None

    app.dependency_overrides[get_db_session] = no_db_session

    @app.get("/me")
    async def me(identity: CurrentIdentity):
        return {"user_id": str(identity.user_id)}

    @app.get("/admin")
    async def admin(identity: AdminIdentity):
        return {"user_id": str(identity.user_id)}

    return TestClient(app, raise_server_exceptions=False)


class TestRequireSignedIn:
    def test_missing_header(self, client):
        response = client.get("/me")

        assert response.status_code == 401
        assert response.json()["detail"] == "Please log in."

    @pytest.mark.parametrize("header", ["Token abc", "Bearer", "Basic dXNlcjpwYXNz"])
    def test_malformed_header(self, client, header):
        response = client.get("/me", headers={"Authorization": header})

        assert response.status_code == 401
        assert response.json()["detail"] == "Please sign in again."

    def test_invalid_token(self, client):
        response = client.get("/me", headers={"Authorization": "Bearer nope"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Please sign in again."

    def test_refresh_token_is_not_accepted(self, client, codec):
        token = codec.issue(TokenKind.REFRESH, uuid4())

        response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401

    def test_access_token_with_altered_signature(self, client, codec):
        token = codec.issue(TokenKind.ACCESS, uuid4())
        header_and_claims, signature = token.rsplit(".", 1)
        # Middle character: the last one carries padding bits
        position = len(signature) // 2
        replacement = "A" if signature[position] != "A" else "B"
        tampered_signature = (
            signature[:position] + replacement + signature[position + 1 :]
        )
        tampered = f"{header_and_claims}.{tampered_signature}"

        response = client.get("/me", headers={"Authorization": f"Bearer {tampered}"})

        assert response.status_code == 401
        assert response.json() == {
            "detail": "Please sign in again.",
            "code": "INVALID_SESSION",
        }
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_valid_access_token(self, client, codec):
        user_id = uuid4()
        token = codec.issue(TokenKind.ACCESS, user_id)

        response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json() == {"user_id": str(user_id)}


class TestRequireRole:
    def _get_admin(self, client, codec, user_id):
        token = codec.issue(TokenKind.ACCESS, user_id)
        return client.get("/admin", headers={"Authorization": f"Bearer {token}"})

    def test_admin_passes(self, client, codec, user_repo):
        user = make_user(role=UserRole.ADMIN)
        user_repo.find_by_id.return_value = user

        response = self._get_admin(client, codec, user.id)

        assert response.status_code == 200
        user_repo.find_by_id.assert_awaited_once_with(user.id)

    def test_plain_user_is_rejected(self, client, codec, user_repo):
        user = make_user(role=UserRole.USER)
        user_repo.find_by_id.return_value = user

        response = self._get_admin(client, codec, user.id)

        assert response.status_code == 401
        assert response.json() == {
            "detail": "You are not authorized to perform this action.",
            "code": "NOT_AUTHORIZED",
        }

    def test_unknown_user_is_rejected(self, client, codec, user_repo):
        user_repo.find_by_id.return_value = None

        response = self._get_admin(client, codec, uuid4())

        assert response.status_code == 401

    def test_lookup_failure_is_internal_error(self, client, codec, user_repo):
        user_repo.find_by_id.side_effect = OperationalError("SELECT", {}, Exception())

        response = self._get_admin(client, codec, uuid4())

        assert response.status_code == 500
        assert response.json()["detail"] == (
            "An error occurred while verifying your authorization."
        )

    def test_signed_out_caller_never_reaches_lookup(self, client, user_repo):
        response = client.get("/admin")

        assert response.status_code == 401
        user_repo.find_by_id.assert_not_called()


class TestEnsureOwner:
    def test_owner_passes(self):
        user_id = uuid4()
        ensure_owner(AuthenticatedIdentity(user_id=user_id, token="t"), user_id)

    def test_other_user_is_forbidden(self):
        with pytest.raises(ForbiddenError):
            ensure_owner(AuthenticatedIdentity(user_id=uuid4(), token="t"), uuid4())
