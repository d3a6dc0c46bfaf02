"""Application configuration from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # LLM (OpenAI-compatible chat completions)
    llm_api_endpoint: str = Field(default="https://api.openai.com/v1", alias="LLM_API_ENDPOINT")
    llm_api_key: str = Field(default="", alias="OPENAI_API_KEY")
    llm_model: str = Field(default="gpt-4o", alias="LLM_MODEL")
    llm_temperature: float = Field(default=0.85, alias="LLM_TEMPERATURE")
    llm_max_tokens: int | None = Field(default=None, alias="LLM_MAX_TOKENS")
    llm_timeout_seconds: float = Field(default=120.0, alias="LLM_TIMEOUT_SECONDS")

    # Reverse geocoding
    geocoding_url: str = Field(
        default="https://nominatim.openstreetmap.org/reverse",
        alias="GEOCODING_URL",
    )
    geocoding_user_agent: str = Field(default="shefa/0.1", alias="GEOCODING_USER_AGENT")
    geocoding_timeout_seconds: float = Field(default=10.0, alias="GEOCODING_TIMEOUT_SECONDS")

    # Ephemeris
    swisseph_ephe_path: str = Field(default="", alias="SWISSEPH_EPHE_PATH")

    # Fallback observer when the caller supplies no location
    default_latitude: float = Field(default=31.7683, alias="DEFAULT_LATITUDE")
    default_longitude: float = Field(default=35.2137, alias="DEFAULT_LONGITUDE")
    default_timezone: str = Field(default="UTC", alias="DEFAULT_TIMEZONE")

    # Site
    site_url: str = Field(default="http://localhost:5173", alias="SITE_URL")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reset_settings_cache() -> None:
    """Clear cached settings (useful in tests)."""
    get_settings.cache_clear()
