"""Application configuration."""

import os
from datetime import datetime
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEFAULT_ALLOWED_ORIGINS = (
    "https://aaasj.org,"
    "https://www.aaasj.org,"
    "https://aaasj.vercel.app,"
    "http://localhost:3000"
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    session_secret: str
    google_client_id: str
    google_client_secret: str
    public_base_url: str = "http://localhost:3000"
    allowed_email_domain: str = "aaa-sj.org"
    session_max_age_seconds: int = 60 * 60 * 24 * 30
    storage_backend: str = "json"
    data_dir: Path = Path("data")
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    smtp_host: str | None = None
    smtp_port: int | None = None
    smtp_user: str | None = None
    smtp_pass: str | None = None
    smtp_secure: bool = False
    scholarship_email_to: str = "scholarship@aaa-sj.org"
    scholarship_email_from: str | None = None
    scholarship_deadline: datetime | None = None
    allowed_origins: str = DEFAULT_ALLOWED_ORIGINS
    rate_limit_window_seconds: int = 15 * 60
    rate_limit_max_requests: int = 100
    log_file: Path | None = None
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def smtp_configured(self) -> bool:
        """Return true when every SMTP credential is present."""
        return not missing_smtp_settings(self)


def parse_allowed_origins(raw: str | None) -> set[str]:
    """Parse the comma-separated CORS origin allow-list."""
    if raw is None:
        return set()
    return {chunk.strip() for chunk in raw.split(",") if chunk.strip()}


def missing_smtp_settings(settings: Settings) -> list[str]:
    """Return the names of SMTP environment variables that are not set."""
    missing = []
    if not settings.smtp_host:
        missing.append("SMTP_HOST")
    if not settings.smtp_port:
        missing.append("SMTP_PORT")
    if not settings.smtp_user:
        missing.append("SMTP_USER")
    if not settings.smtp_pass:
        missing.append("SMTP_PASS")
    return missing


def validate_environment(settings: Settings) -> list[str]:
    """Return human-readable problems with the loaded configuration."""
    errors: list[str] = []
    if not settings.session_secret.strip():
        errors.append("Missing required environment variable: SESSION_SECRET")
    if not settings.public_base_url.startswith("http"):
        errors.append(
            "PUBLIC_BASE_URL must be a valid URL starting with http:// or https://"
        )
    if settings.storage_backend not in {"json", "supabase"}:
        errors.append(f"Unknown STORAGE_BACKEND: {settings.storage_backend}")
    if settings.storage_backend == "supabase" and not (
        settings.supabase_url and settings.supabase_service_key
    ):
        errors.append(
            "STORAGE_BACKEND=supabase requires SUPABASE_URL and SUPABASE_SERVICE_KEY"
        )
    return errors
