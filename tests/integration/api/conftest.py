"""Pytest fixtures for API integration tests.

The app runs against a throwaway SQLite file and the in-process session
cache, so these tests need neither Postgres nor Redis. Admins are made
through the ``bookshelf users promote`` command, the same way operators
do it.
"""

from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from typer.testing import CliRunner

from bookshelf.presentation.api.app import API_PREFIX, create_app
from bookshelf.presentation.cli.app import app as cli_app
from bookshelf_config.settings import Settings
from tests.shared.fixtures.api import bearer, sign_up_and_in
from tests.shared.fixtures.factories import ISBN_PAIRS

ADMIN_EMAIL = "grace@example.com"


@pytest.fixture
def api_prefix() -> str:
    return API_PREFIX


@pytest.fixture
def api_settings(tmp_path) -> Settings:
    """Test API settings with debug enabled."""
    return Settings(
        # Required security settings
        access_token_secret=SecretStr("test-access-secret-for-testing-only"),
        refresh_token_secret=SecretStr("test-refresh-secret-for-testing-only"),
        postgres_password=SecretStr("test-password"),
        # Storage
        database_url_override=f"sqlite+aiosqlite:///{tmp_path}/bookshelf.db",
        session_cache_backend="memory",
        # Cheap hashing keeps the suite fast
        password_hash_rounds=4,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
    )


@pytest.fixture
def test_client(api_settings):
    """TestClient with the lifespan running (tables created, container built)."""
    app = create_app(settings=api_settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def user_tokens(test_client) -> dict:
    return sign_up_and_in(test_client)


@pytest.fixture
def auth_headers(user_tokens) -> dict:
    return bearer(user_tokens)


@pytest.fixture
def admin_headers(test_client, api_settings) -> dict:
    """Headers of a signed-in user promoted to admin via the CLI."""
    tokens = sign_up_and_in(test_client, email=ADMIN_EMAIL)

    with patch(
        "bookshelf.presentation.cli.app.get_settings",
        return_value=api_settings,
    ):
        result = CliRunner().invoke(cli_app, ["users", "promote", ADMIN_EMAIL])
    assert result.exit_code == 0, result.output

    return bearer(tokens)


@pytest.fixture
def author_id(test_client, admin_headers) -> int:
    response = test_client.post(
        f"{API_PREFIX}/authors",
        json={"name": "Ursula K. Le Guin", "country": "US"},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


@pytest.fixture
def publisher_id(test_client, admin_headers) -> int:
    response = test_client.post(
        f"{API_PREFIX}/publishers",
        json={"name": "Harper & Row", "country": "US"},
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()["id"]


@pytest.fixture
def book_payload(author_id, publisher_id) -> dict:
    isbn10, isbn13 = ISBN_PAIRS[0]
    return {
        "title": "The Dispossessed",
        "authorID": author_id,
        "image": "https://example.com/covers/dispossessed.jpg",
        "publisherID": publisher_id,
        "published": "1974-05-01",
        "isbn13": isbn13,
        "isbn10": isbn10,
        "status": "available",
    }
