"""Application settings parsed from environment variables and defaults."""

import json
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = ["http://localhost:3000", "http://127.0.0.1:3000"]


def _split_list(value: str | list[str] | None) -> list[str]:
    """Normalize list settings from JSON, CSV, or list inputs."""
    if isinstance(value, list):
        return [item.strip() for item in value if isinstance(item, str) and item.strip()]
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return []
        try:
            parsed = json.loads(stripped)
        except json.JSONDecodeError:
            parsed = None
        if isinstance(parsed, list):
            return [str(item).strip() for item in parsed if str(item).strip()]
        return [item.strip() for item in stripped.split(",") if item.strip()]
    return []


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = "BeefMusic API"
    environment: str = "development"
    api_prefix: str = "/api"

    database_url: str = "sqlite+aiosqlite:///./beefmusic.db"
    test_database_url: Optional[str] = None

    access_token_expires_minutes: int = 60 * 24 * 7
    jwt_secret_key: str = "change-me"
    jwt_algorithm: str = "HS256"

    admin_username: Optional[str] = None
    admin_password: Optional[str] = None

    log_level: str = "INFO"
    cors_origins: list[str] | str = Field(default_factory=lambda: DEFAULT_CORS_ORIGINS.copy())
    redis_url: str = "redis://redis:6379/0"
    worker_queue_names: list[str] | str = Field(default_factory=lambda: ["default", "notifications"])

    discord_webhook_url: Optional[str] = None
    discord_webhook_requests: Optional[str] = None
    discord_webhook_suggestions: Optional[str] = None
    discord_webhook_reports: Optional[str] = None

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _split_cors_origins(cls, value: str | list[str] | None) -> list[str]:
        """Normalize CORS origins, falling back to the local frontend."""
        return _split_list(value) or DEFAULT_CORS_ORIGINS.copy()

    @field_validator("worker_queue_names", mode="before")
    @classmethod
    def _split_worker_queue_names(cls, value: str | list[str] | None) -> list[str]:
        """Normalize worker queue names; an empty value means the default queue."""
        return _split_list(value) or ["default"]

    def webhook_for(self, channel: str) -> str | None:
        """Return the Discord webhook for a channel, or the shared fallback."""
        specific = {
            "requests": self.discord_webhook_requests,
            "suggestions": self.discord_webhook_suggestions,
            "reports": self.discord_webhook_reports,
        }.get(channel)
        return specific or self.discord_webhook_url

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


@lru_cache
def get_settings() -> Settings:
    """Return cached settings to avoid re-parsing environment variables."""
    return Settings()


settings = get_settings()
