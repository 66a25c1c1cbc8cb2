"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
Database connection parameters and timeouts are read from the environment.
"""

from userstore.configs.database import DatabaseSettings
from userstore.configs.settings import Settings, get_settings

__all__ = ["DatabaseSettings", "Settings", "get_settings"]
