"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. BOOKSHELF_ENV_FILE environment variable (path to .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal
from urllib.parse import quote

from limits import parse
from pydantic import SecretStr, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Issuer claim embedded in every token we sign
TOKEN_ISSUER = "bookshelf.api"


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / "pyproject.toml").is_file():
            return parent
        if parent == Path("/app"):
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    """Get the config directory path."""
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. BOOKSHELF_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("BOOKSHELF_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Security (MUST be set - app fails without these)
    access_token_secret: SecretStr
    refresh_token_secret: SecretStr
    postgres_password: SecretStr

    # Application
    app_name: str = "Bookshelf"
    debug: bool = False  # Echo SQL statements

    # Database (POSTGRES_ prefix)
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_db: str = "bookshelf"
    # Used verbatim when set (e.g. sqlite+aiosqlite:///./data/dev.db)
    database_url_override: str | None = None

    # Session cache (REDIS_ prefix)
    session_cache_backend: Literal["redis", "memory"] = "redis"
    redis_host: str = "localhost"
    redis_port: int = 6379
    redis_db: int = 0
    redis_password: SecretStr | None = None
    redis_socket_timeout: float = 5.0

    # Tokens
    access_token_expiration: str = "15m"
    refresh_token_expiration: str = "1d"
    refresh_token_cache_ttl_seconds: int = 86400

    # Passwords
    password_hash_rounds: int = 10

    # Request limits per client address (RATE_LIMIT_ prefix)
    # Format: "<count>/<window>", e.g. "10/15 minutes" or "100 per hour"
    rate_limit_enabled: bool = True
    rate_limit_storage_url: str = "async+memory://"
    rate_limit_auth: str = "10/15 minutes"
    rate_limit_database: str = "30/15 minutes"
    rate_limit_common: str = "500/15 minutes"

    # API (API_ prefix)
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_debug: bool = False
    api_cors_origins: str = ""  # Empty = no CORS allowed

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> str:
        """Ensure cors_origins is stored as comma-separated string."""
        if isinstance(v, list):
            return ",".join(v)
        return str(v) if v else ""

    @field_validator("refresh_token_cache_ttl_seconds", "password_hash_rounds")
    @classmethod
    def _validate_positive(cls, v: int) -> int:
        if v <= 0:
            msg = "Value must be a positive integer"
            raise ValueError(msg)
        return v

    @field_validator("rate_limit_auth", "rate_limit_database", "rate_limit_common")
    @classmethod
    def _validate_rate_limit(cls, v: str) -> str:
        parse(v)  # raises ValueError on malformed limits
        return v

    @field_validator("rate_limit_storage_url")
    @classmethod
    def _validate_rate_limit_storage(cls, v: str) -> str:
        if not v.startswith("async+"):
            msg = "Rate limit storage must be an async storage URL (async+...://)"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def _validate_token_secrets(self) -> Settings:
        access = self.access_token_secret.get_secret_value()
        refresh = self.refresh_token_secret.get_secret_value()
        if not access or not refresh:
            msg = "Token secrets cannot be empty"
            raise ValueError(msg)
        if access == refresh:
            msg = "Access and refresh token secrets must differ"
            raise ValueError(msg)
        return self

    # Computed properties
    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Construct the database URL from components."""
        if self.database_url_override:
            return self.database_url_override
        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{quote(self.postgres_password.get_secret_value(), safe='')}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def redis_url(self) -> str:
        """Construct the Redis URL from components."""
        auth = ""
        if self.redis_password is not None:
            auth = f":{quote(self.redis_password.get_secret_value(), safe='')}@"
        return f"redis://{auth}{self.redis_host}:{self.redis_port}/{self.redis_db}"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    Required fields (access_token_secret, refresh_token_secret,
    postgres_password) must be provided via environment variables or .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
