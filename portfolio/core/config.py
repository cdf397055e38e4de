"""Settings for the portfolio service, grouped by env prefix.

APP_ (HTTP behaviour and rate limits), DB_ (database), AUTH_ (admin
sessions) and LOG_ (logging). Values come from the process environment,
optionally pre-populated from ``.env.<APP_ENV>`` at the project root.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


APP_ENV = os.getenv("APP_ENV", "development")

# .env lookup is anchored here, not at the working directory
PROJECT_ROOT = Path(__file__).resolve().parents[2]

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_path = PROJECT_ROOT / ENV_FILE_MAP.get(APP_ENV, ".env.development")

# Nested BaseSettings do not inherit env_file, so the file is pushed into
# os.environ up front. Variables already set in the environment win.
if _env_path.is_file():
    from dotenv import load_dotenv
    load_dotenv(_env_path, override=False)


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )

    rate_limit_enabled: bool = Field(
        True,
        description="Enable per-client rate limiting on public write endpoints",
    )
    contact_rate_limit_requests: int = Field(
        5,
        description="Maximum contact submissions allowed per window (per client)",
        ge=1,
    )
    contact_rate_limit_window_seconds: float = Field(
        60,
        description="Contact rate limit window size in seconds",
        gt=0,
    )
    login_rate_limit_requests: int = Field(
        10,
        description="Maximum admin login attempts allowed per window (per client)",
        ge=1,
    )
    login_rate_limit_window_seconds: float = Field(
        300,
        description="Login rate limit window size in seconds",
        gt=0,
    )
    rate_limit_sweep_interval_seconds: float = Field(
        300,
        description="Minimum interval between sweeps of expired limiter entries (0 disables)",
        ge=0,
    )
    rate_limit_include_headers: bool = Field(
        True,
        description="Include X-RateLimit-* and Retry-After headers when throttling",
    )
    trust_forwarded_for: bool = Field(
        True,
        description="Derive the client key from X-Forwarded-For (set when behind a proxy)",
    )

    resume_path: str | None = Field(
        None,
        description="Filesystem path of the resume PDF served by /api/resume",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class DatabaseSettings(BaseSettings):
    """Relational database configuration."""

    url: str = Field(
        "sqlite:///./portfolio.db",
        description="SQLAlchemy database URL",
    )
    echo: bool = Field(
        False,
        description="Log every SQL statement",
    )

    model_config = SettingsConfigDict(
        env_prefix="DB_",
        case_sensitive=False,
    )


class AuthSettings(BaseSettings):
    """Admin session configuration."""

    session_cookie_name: str = Field(
        "portfolio_session",
        description="Name of the HttpOnly cookie carrying the session token",
    )
    session_ttl_minutes: int = Field(
        60 * 24,
        description="Lifetime of an admin session in minutes",
        ge=1,
    )
    cookie_secure: bool = Field(
        False,
        description="Mark the session cookie Secure (HTTPS only)",
    )
    admin_email: str | None = Field(
        None,
        description="Email of the admin seeded on startup when no admin exists",
    )
    admin_password: str | None = Field(
        None,
        description="Password of the admin seeded on startup",
    )

    model_config = SettingsConfigDict(
        env_prefix="AUTH_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="'json' or 'plain'")
    output: str = Field("stdout", description="'stdout' or 'file'")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int = Field(10 * 1024 * 1024, description="Rotate after this many bytes (0 disables)")
    backup_count: int = Field(5, description="Rotated files to keep")
    request_id_header: str = Field("X-Request-ID", description="Correlation id header")

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """All settings groups. Each group reads its own env prefix."""

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=AppSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    auth: AuthSettings = Field(default_factory=AuthSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


settings = Settings()
