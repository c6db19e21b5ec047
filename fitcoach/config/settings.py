"""Application configuration settings."""
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="FITCOACH_",
        extra="ignore",
    )

    # Application
    app_name: str = "FitCoach Schedule"
    debug: bool = False

    # Database
    database_url: str = "sqlite+aiosqlite:///./fitcoach.db"
    db_pool_recycle: int = 300
    db_echo: bool = False

    # Logging
    log_json: bool = True

    # Scheduling
    reminder_lead_minutes: int = 15  # Reminder fires this long before session start
    upcoming_window_days: int = 7
    week_starts_on: int = 0  # 0 = Monday ... 6 = Sunday


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
