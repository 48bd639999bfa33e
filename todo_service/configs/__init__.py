"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from todo_service.configs.database import DatabaseSettings
from todo_service.configs.settings import Settings, get_settings

__all__ = ["DatabaseSettings", "Settings", "get_settings"]
