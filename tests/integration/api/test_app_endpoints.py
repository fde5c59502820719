"""Integration tests for the unprefixed endpoints and app wiring."""

from fastapi.testclient import TestClient


def test_welcome_message(test_client: TestClient):
    response = test_client.get("/")

    assert response.status_code == 200
    assert response.json() == {"message": "Welcome to the API! 🚀"}


def test_health_reports_cache(test_client: TestClient):
    response = test_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["session_cache"] == "ok"
    assert data["version"]


def test_docs_enabled_in_debug(test_client: TestClient):
    assert test_client.get("/openapi.json").status_code == 200


def test_cors_preflight(test_client: TestClient, api_prefix):
    response = test_client.options(
        f"{api_prefix}/auth/signin",
        headers={
            "Origin": "http://localhost:3000",
            "Access-Control-Request-Method": "POST",
        },
    )

    assert response.status_code == 200
    assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


def test_unknown_route(test_client: TestClient):
    assert test_client.get("/nope").status_code == 404
