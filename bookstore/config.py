"""
Application configuration - environment-driven settings via pydantic-settings.

get_settings() is cached, so there is a single Settings instance per process.
Tests that change the environment must call get_settings.cache_clear().
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # API
    app_name: str = "Bookstore API"

    # Database
    database_path: str = "data/books.db"

    # Observability
    log_level: str = "INFO"

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level '{v}'")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
