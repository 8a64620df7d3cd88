"""Application configuration using pydantic-settings."""

import secrets
from functools import lru_cache
from typing import List, Literal, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings, read from TRACKER_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    environment: Literal["development", "test", "production"] = "development"
    log_level: str = "INFO"
    log_file: Optional[str] = None

    # Storage
    storage_backend: Literal["memory", "database"] = "database"
    database_url: str = "sqlite:///./data/tracker.db"
    seed_on_startup: bool = True

    # Admin auth
    admin_password: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("ADMIN_PASSWORD", "TRACKER_ADMIN_PASSWORD"),
    )
    password_file: str = "data/.admin-password.json"
    jwt_secret: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 720
    max_login_attempts: int = 5
    login_window_seconds: int = 15 * 60

    # Uploads
    max_upload_bytes: int = 10 * 1024 * 1024
    enforce_row_validation: bool = False

    # Dashboard
    dashboard_month: Optional[str] = None

    cors_origins: List[str] = ["*"]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
