# This project was developed with assistance from AI tools.
"""
Application configuration.

All settings read from environment variables with sensible local dev defaults.
Group related settings together; each group becomes a section future PRs extend.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Resolve project root .env regardless of CWD
_PROJECT_ROOT = Path(__file__).resolve().parents[5]
_ENV_FILE = _PROJECT_ROOT / ".env"


class Settings(BaseSettings):
    """Application settings -- single source of truth for env-driven config."""

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # -- App --
    APP_NAME: str = "loan-console"
    DEBUG: bool = False

    # -- CORS --
    ALLOWED_HOSTS: list[str] = ["http://localhost:3000"]

    # -- Loan backend --
    BACKEND_URL: str = Field(
        default="http://localhost:5000",
        description="Base URL of the REST backend that owns loans, borrowers and users.",
    )
    BACKEND_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        description="Per-request timeout for backend calls.",
    )
    BACKEND_SERVICE_TOKEN: str | None = Field(
        default=None,
        description="Bearer token used for backend calls when the caller sent none.",
    )

    # -- Auth --
    AUTH_DISABLED: bool = Field(
        default=False,
        description="Bypass JWT validation. Set True for tests and local dev without an IdP.",
    )
    OIDC_ISSUER_URL: str = "http://localhost:8080"
    OIDC_REALM: str = "microloan"
    JWKS_CACHE_TTL: int = Field(
        default=300,
        description="JWKS cache lifetime in seconds (default 5 minutes).",
    )

    # -- Listing --
    PAGE_SIZE: int = Field(
        default=5,
        ge=1,
        description="Rows per page on console list views.",
    )


settings = Settings()
