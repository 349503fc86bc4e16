"""Runtime configuration for admiral-cli.

Values are loaded with pydantic-settings from ``ADMIRAL_*`` environment
variables and from a per-user ``.env`` file, then optionally overridden
by global command-line options (see :func:`load_settings`).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from admiral_cli.exceptions import ConfigurationError

DEFAULT_URL = "http://127.0.0.1:8282"


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra deps)."""
    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "admiral-cli"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "admiral-cli"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "admiral-cli"
    return Path.home() / ".config" / "admiral-cli"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class Settings(BaseSettings):
    """Connection settings for the Admiral service."""

    model_config = SettingsConfigDict(
        env_prefix="ADMIRAL_",
        env_file=str(get_user_env_file()),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    url: str = Field(default=DEFAULT_URL, description="Base URL of the service.")
    token: str | None = Field(default=None, description="Auth token sent with every request.")
    timeout: float = Field(default=30.0, gt=0)
    verify_tls: bool = True
    task_timeout: float = Field(default=300.0, gt=0)
    poll_interval: float = Field(default=1.0, gt=0)

    @field_validator("url")
    @classmethod
    def _check_url(cls, value: str) -> str:
        stripped = value.strip().rstrip("/")
        if not stripped.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return stripped


def load_settings(**overrides: Any) -> Settings:
    """Load settings, applying non-``None`` *overrides* on top.

    Raises
    ------
    ConfigurationError
        When a value (from the environment or an override) is invalid.
    """
    values = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(_env_file=get_user_env_file(), **values)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first.get("loc", ())) or "settings"
        raise ConfigurationError(
            f"Invalid configuration for '{field}': {first.get('msg', exc)}",
            hint="Check the ADMIRAL_* environment variables or the global options.",
        ) from exc
