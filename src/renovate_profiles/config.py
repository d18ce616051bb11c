"""Tooling configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the profile tooling, loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RENOVATE_PROFILES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "text"] = "text"

    # Profiles
    default_profile: str = "default"

    # Variable whose presence switches the bot out of dry-run
    dry_run_env_var: str = "RENOVATE_REPOSITORIES"

    # Rendering
    output_format: Literal["js", "json", "yaml"] = "js"

    # Metrics
    metrics_enabled: bool = True


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
