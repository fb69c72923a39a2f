"""Application settings using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    # Supabase (only required by commands that touch the event store)
    supabase_url: str | None = Field(default=None, alias="PUBLIC_SUPABASE_URL")
    supabase_service_role_key: str | None = Field(default=None, alias="SUPABASE_SERVICE_ROLE_KEY")

    # Page fetching
    scraper_user_agent: str = Field(
        default="Gaari-Bergen-Events/1.0 (+https://gaari.no)",
        alias="SCRAPER_USER_AGENT",
    )
    fetch_accept_language: str = Field(
        default="nb-NO,nb;q=0.9,no;q=0.8,en;q=0.5",
        alias="FETCH_ACCEPT_LANGUAGE",
    )
    fetch_timeout: float = Field(default=15.0, alias="FETCH_TIMEOUT")
    # Minimum pause between two requests to third-party sites
    fetch_delay_seconds: float = Field(default=1.0, ge=0, alias="FETCH_DELAY_SECONDS")
    # 1 = single attempt, no retries
    fetch_max_attempts: int = Field(default=1, ge=1, le=5, alias="FETCH_MAX_ATTEMPTS")

    # Venue registry (JSON object of venue name -> website). Built-in table if unset.
    venue_registry_path: str | None = Field(default=None, alias="VENUE_REGISTRY_PATH")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )
    log_format: Literal["json", "console"] = Field(default="console", alias="LOG_FORMAT")
    log_file: str | None = Field(default=None, alias="LOG_FILE")

    # Modes
    dry_run: bool = Field(default=False, alias="DRY_RUN")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
