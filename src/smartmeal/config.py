"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    admin_emails: str | None = None
    google_maps_api_key: str | None = None
    google_maps_base_url: str = "https://maps.googleapis.com/maps/api"
    stock_expiry_alert_days: int = 3
    stockout_window_days: int = 7
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_admin_emails(raw: str | None) -> set[str]:
    """Parse the comma-separated bootstrap admin e-mails."""
    if raw is None:
        return set()
    emails: set[str] = set()
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if value and "@" in value:
            emails.add(value)
    return emails
