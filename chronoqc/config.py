"""Configuration management for the puzzle integrity core."""

from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    # API Keys
    openai_api_key: Optional[str] = Field(None)
    anthropic_api_key: Optional[str] = Field(None)

    # Judge response cache
    redis_url: str = Field("redis://localhost:6379")
    cache_ttl_seconds: int = Field(86400)

    # Application Settings
    environment: str = Field("development")
    log_level: str = Field("INFO")

    # Leakage detection
    leaky_phrases_path: str = Field("data/leaky_phrases.json")

    # Composition judge
    judge_model: str = Field("gpt-4o-mini")
    judge_temperature: float = Field(0.3)
    judge_max_tokens: int = Field(4000)
    max_composition_attempts: int = Field(3)


def get_settings() -> Settings:
    """Get application settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
