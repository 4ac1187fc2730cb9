"""
Configuration management module.

Provides centralized, type-safe configuration using Pydantic Settings.
All config modules support environment variable mapping with validation.
"""

from cigno.configs.agents import AgentSettings
from cigno.configs.database import DatabaseSettings
from cigno.configs.settings import Settings, get_settings

__all__ = ["AgentSettings", "DatabaseSettings", "Settings", "get_settings"]
