"""Application configuration settings."""

import secrets
import typing as t
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = "Shelfwise"
    app_version: str = "1.0.0"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./shelfwise.db"

    # Authentication
    secret_key: str = secrets.token_urlsafe(32)
    algorithm: str = "HS256"

    # Gemini
    gemini_api_key: str = ""
    gemini_model: str = "gemini-3-flash-preview"
    gemini_timeout_seconds: float = 60.0
    gemini_temperature: float = 0.2

    # Image uploads
    max_image_size_mb: int = 5

    # Pantry reminders
    default_notification_threshold_days: int = 3
    default_perishable_reminder_days: int = 7
    reminder_cron: str = "0 8 * * *"
    reminder_timezone: str = "UTC"
    reminder_debug_uids: t.List[str] = []

    # Push notifications (optional)
    push_enabled: bool = False
    firebase_credentials_path: Path | None = None

    # CORS
    cors_origins: t.List[str] = ["*"]


SETTINGS = Settings()
