"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    guidelines_url: str = "http://localhost:3000/data/who_nutrition_guidelines.json"
    guidelines_timeout_seconds: float = 15.0
    guidelines_cache_ttl_seconds: int = 86400
    guidelines_retry_attempts: int = 0
    autochef_seed: int | None = None
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
