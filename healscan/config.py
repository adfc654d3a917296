"""
Configuration management for HealScan AI.

Uses Pydantic Settings for type-safe environment variable handling.
All configuration is loaded from environment variables or .env file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # ==========================================================================
    # Application
    # ==========================================================================
    app_name: str = "HealScan AI"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # ==========================================================================
    # Server
    # ==========================================================================
    host: str = "0.0.0.0"
    port: int = 8000

    # ==========================================================================
    # Inference (Gemini)
    # ==========================================================================
    gemini_api_key: str = ""
    gemini_model: str = "gemini-1.5-flash"
    request_timeout_seconds: Optional[float] = None

    # ==========================================================================
    # Rate Limiting
    # ==========================================================================
    rate_limit_per_minute: int = 10

    # ==========================================================================
    # File Upload
    # ==========================================================================
    max_file_size_mb: int = 10

    # ==========================================================================
    # History
    # ==========================================================================
    history_path: str = "data/history.json"
    history_limit: int = 25

    # ==========================================================================
    # Computed Properties
    # ==========================================================================
    @property
    def max_file_size_bytes(self) -> int:
        """Maximum file size in bytes."""
        return self.max_file_size_mb * 1024 * 1024

    @property
    def history_file(self) -> Path:
        """Path to the history JSON file."""
        return Path(self.history_path)


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience access
settings = get_settings()
