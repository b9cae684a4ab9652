"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (deployments might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


class ThrottleSettings(BaseSettings):
    """Quota parameters and durable state location.

    These are fixed for the lifetime of a session; the controller reads them
    once at startup.
    """

    request_limit: int = Field(
        10,
        description="Maximum number of submissions admitted per quota window",
        ge=1,
    )
    period_seconds: int = Field(
        30 * 60,
        description="Length of the throttle window in seconds",
        ge=1,
    )
    poll_interval_seconds: float = Field(
        60.0,
        description="How often the stored expiration is re-checked while throttled",
        gt=0,
    )
    storage_backend: Literal["file", "memory"] = Field(
        "file",
        description="Durable storage backend for the throttle expiration",
    )
    storage_path: str = Field(
        ".url_throttle/storage.json",
        description="JSON file used by the file storage backend",
    )
    display_timezone: str | None = Field(
        None,
        description="IANA timezone for the wait-period notice (local time when unset)",
    )

    model_config = SettingsConfigDict(
        env_prefix="THROTTLE_",
        case_sensitive=False,
    )


class TransportSettings(BaseSettings):
    """Backend request transport configuration."""

    mode: str = Field(
        "http",
        description="Transport implementation (http, mock)",
    )
    api_url: str = Field(
        "https://example.com/checkUrl",
        description="Endpoint receiving POST {\"url\": ...} validation requests",
    )
    timeout_seconds: float = Field(
        10.0,
        description="Request timeout in seconds",
        gt=0,
    )

    model_config = SettingsConfigDict(
        env_prefix="TRANSPORT_",
        case_sensitive=False,
    )


class InputSettings(BaseSettings):
    """Limits applied to user input before it reaches the throttle."""

    max_url_length: int = Field(
        2000,
        description="Maximum accepted URL length in characters",
        ge=1,
    )

    model_config = SettingsConfigDict(
        env_prefix="INPUT_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: Literal["json", "plain"] = Field("json", description="Log line format")
    output: Literal["stdout", "file"] = Field("stdout", description="Log destination")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(
        0,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(3, description="Rotated files to keep", ge=0)

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if a setting is out of range.
    """

    app_env: str = APP_ENV
    throttle: ThrottleSettings = Field(default_factory=ThrottleSettings)
    transport: TransportSettings = Field(default_factory=TransportSettings)
    input: InputSettings = Field(default_factory=InputSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()
