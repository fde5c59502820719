"""
Pytest configuration for persistence integration tests.

Integration tests use Testcontainers for ephemeral PostgreSQL and Redis
instances. Import the shared fixtures to make them available.
"""

# Re-export shared database fixtures
from tests.shared.fixtures.database import (
    async_engine,
    db_session,
    postgres_container,
    redis_container,
    redis_url,
)

__all__ = [
    "async_engine",
    "db_session",
    "postgres_container",
    "redis_container",
    "redis_url",
]
