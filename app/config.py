"""Configuration management using pydantic-settings."""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Gemini API Configuration
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash"
    ai_temperature: float = 0.7
    ai_max_output_tokens: int = 4096

    # External call timeouts (seconds); a timeout is treated as a failed call
    ai_timeout_seconds: float = 45.0
    metadata_timeout_seconds: float = 20.0

    # Application Configuration
    app_env: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3001

    # Comma-separated list, only used in production
    cors_origins: str = ""

    # Rate limiting
    rate_limit_enabled: bool = True
    rate_limit_per_minute: int = 60
    rate_limit_ai_per_minute: int = 15  # Gemini free tier quota

    # Uploads are written here and removed after processing
    upload_dir: str = "./temp"

    # Video context extraction
    description_max_chars: int = 1000
    max_tags: int = 10
    simulate_comments: bool = True

    # Derive trade result from direction and prices instead of randomly
    enforce_trade_consistency: bool = False

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.app_env.lower() == "production"

    @property
    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def gemini_configured(self) -> bool:
        return bool(self.gemini_api_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
