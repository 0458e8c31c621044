"""
Pydantic-based configuration settings for ScamCheck.

Settings are loaded once at process start and handed to the analysis
dispatcher explicitly; nothing reads them from module state afterwards.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class GeminiSettings(BaseSettings):
    """Settings for the Gemini generative backend."""

    model_config = SettingsConfigDict(
        env_prefix="SCAMCHECK_GEMINI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("SCAMCHECK_GEMINI_API_KEY", "GEMINI_API_KEY"),
    )
    model: str = "gemini-1.5-flash-latest"
    base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    timeout_seconds: float = Field(default=60.0, gt=0)

    @property
    def is_configured(self) -> bool:
        """Whether an API key is available."""
        return self.api_key is not None and bool(self.api_key.get_secret_value().strip())


class ObservabilitySettings(BaseSettings):
    """Settings for logging."""

    model_config = SettingsConfigDict(env_prefix="SCAMCHECK_", extra="ignore")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    json_logs: bool = True


class ScamCheckSettings(BaseSettings):
    """
    Main configuration settings for ScamCheck.

    Configuration can be provided via:
    - Environment variables with SCAMCHECK_ prefix (GEMINI_API_KEY is also read)
    - .env file in current directory
    - Direct instantiation with kwargs

    Example:
        ```python
        settings = ScamCheckSettings(environment="prod")
        dispatcher = AnalysisDispatcher.from_settings(settings)
        ```
    """

    model_config = SettingsConfigDict(
        env_prefix="SCAMCHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    debug: bool = Field(default=False)

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)

    gemini: GeminiSettings = Field(default_factory=GeminiSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        """Accept environment names in any case."""
        return v.lower() if isinstance(v, str) else v

    def is_production(self) -> bool:
        """Check if running in production."""
        return self.environment == "prod"

    def is_development(self) -> bool:
        """Check if running in development."""
        return self.environment == "dev"

    def include_raw_response(self) -> bool:
        """Whether successful analyses carry the raw model output."""
        return self.is_development() or self.debug


@lru_cache
def get_settings(env_file: str | None = None) -> ScamCheckSettings:
    """
    Get cached settings instance.

    To reload settings, clear the cache with `get_settings.cache_clear()`.

    Args:
        env_file: Optional path to .env file

    Returns:
        Settings instance
    """
    if env_file:
        return ScamCheckSettings(_env_file=env_file)

    for env_path in [".env", ".env.local"]:
        if Path(env_path).exists():
            return ScamCheckSettings(_env_file=env_path)

    return ScamCheckSettings()
