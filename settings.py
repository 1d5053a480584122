"""
Application settings for MindForge.

Uses Pydantic Settings for environment variable management with .env file support.
"""

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="MINDFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    gemini_api_key: str = Field(
        default="",
        validation_alias=AliasChoices(
            "MINDFORGE_GEMINI_API_KEY", "GEMINI_API_KEY", "API_KEY"
        ),
        description="Google Gemini API key used by the content generator",
    )
    gemini_model: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model name for content generation",
    )
    request_timeout_s: float = Field(
        default=60.0,
        gt=0,
        description="Timeout for one content generation request",
    )
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for the stderr log sink",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
