"""
Configuration management for ScamCheck.

Uses Pydantic BaseSettings for type-safe, validated configuration
with support for environment variables and .env files.
"""

from scamcheck.config.settings import (
    GeminiSettings,
    ObservabilitySettings,
    ScamCheckSettings,
    get_settings,
)

__all__ = [
    "ScamCheckSettings",
    "GeminiSettings",
    "ObservabilitySettings",
    "get_settings",
]
