"""
Unified application settings.

Aggregates all configuration modules into a single Settings class.

Dependencies: All config modules
System role: Central configuration aggregator for the application
"""

from functools import lru_cache

from pydantic import Field

from todo_service.configs.base import BaseSettings
from todo_service.configs.database import DatabaseSettings


class Settings(BaseSettings):
    """Unified application settings aggregating all config modules."""

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)


@lru_cache
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Environment variables are read once, on first call. Components such as
    DataSource never call this themselves; they receive settings explicitly.

    Returns:
        Settings: Application settings instance

    Usage:
        from todo_service.configs import get_settings
        settings = get_settings()
        data_source = DataSource(settings.database)
    """
    return Settings()
