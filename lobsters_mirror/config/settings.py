"""Application settings using Pydantic Settings for environment-based configuration."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DialectName = Literal["gemini", "gopher"]


class Settings(BaseSettings):
    """
    Central configuration for the mirror.

    All settings can be overridden via MIRROR_-prefixed environment
    variables (e.g., MIRROR_WORKER_COUNT=8). CLI options take precedence
    over both for a single run.
    """

    model_config = SettingsConfigDict(
        env_prefix="MIRROR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Environment
    environment: Literal["development", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    # Source feed
    host: str = Field(
        default="lobste.rs",
        description="Host to mirror; https:// is assumed when no scheme is given",
    )
    user_agent: str = "lobsters-mirror/0.1.0"
    http_timeout_seconds: float = Field(default=30.0, gt=0.0, le=300.0)

    # Output
    output_dir: str = "."
    dialects: list[DialectName] = Field(default_factory=lambda: ["gemini", "gopher"])

    # Worker pool size for thread fetches
    worker_count: int = Field(default=4, ge=1, le=64)

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once.
    Clear cache with get_settings.cache_clear() if needed.
    """
    return Settings()
