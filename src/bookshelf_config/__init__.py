"""Shared application configuration package."""

from .settings import (
    TOKEN_ISSUER,
    Settings,
    clear_settings_cache,
    get_config_dir,
    get_settings,
)

__all__ = [
    "TOKEN_ISSUER",
    "Settings",
    "clear_settings_cache",
    "get_config_dir",
    "get_settings",
]
