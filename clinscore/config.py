"""
ClinScore Configuration Module
==============================

Centralized configuration management using Pydantic Settings.

Loads configuration from:
    1. Environment variables (prefixed ``CLINSCORE_``)
    2. .env file (if present)
    3. Default values

Usage:
    from clinscore.config import settings

    print(settings.scores_dir)
    print(settings.log_level)

Author: ClinScore Team
Version: 1.0.0
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Naming convention: CLINSCORE_UPPER_SNAKE_CASE in env, lower_snake_case in code.
    """

    model_config = SettingsConfigDict(
        env_prefix="CLINSCORE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # =========================================================================
    # Application Settings
    # =========================================================================

    app_name: str = Field(default="ClinScore", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=True, description="Render logs as JSON")
    log_file: str = Field(default="", description="Optional log file path")

    # =========================================================================
    # Score Library
    # =========================================================================

    scores_dir: str = Field(
        default="scores",
        description="Directory containing score definition YAML files"
    )
    default_language: Literal["en", "de"] = Field(
        default="en",
        description="Language for result labels and exports"
    )
    export_dir: str = Field(default="exports", description="Directory for exported results")

    # =========================================================================
    # API Server
    # =========================================================================

    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")
    cors_allowed_origins: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [o.strip() for o in self.cors_allowed_origins.split(",") if o.strip()]


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are loaded only once.

    Returns:
        Settings instance
    """
    return Settings()


# Convenience alias
settings = get_settings()
