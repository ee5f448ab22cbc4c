"""
Configuration Settings

This module defines application configuration using Pydantic Settings.
All configuration is loaded from environment variables or .env file.

Design Decisions:
- Uses pydantic-settings for type-safe configuration
- Mappings live in a single JSON file that must exist before the service starts
- Reachability probes are bounded by a short timeout (1 second by default)
"""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["Settings", "settings"]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Project Configuration
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Log level for application loggers"
    )

    # Storage Configuration
    # The file holds {"urlMap": {"<short code>": "<original url>"}}
    MAPPING_FILE: Path = Field(
        default=Path("urlmapping.json"),
        description="Path of the JSON file holding all short code mappings"
    )
    CREATE_MAPPING_FILE: bool = Field(
        default=False,
        description="Create an empty mapping file on startup if it is missing"
    )

    # Application Configuration
    BASE_URL: str = Field(
        default="http://localhost:8080",
        description="Base URL for generating short URLs"
    )
    VALIDATION_TIMEOUT: float = Field(
        default=1.0,
        description="Timeout in seconds for the reachability probe of a URL"
    )
    MAX_URL_LENGTH: int = Field(
        default=2048,
        description="Maximum accepted length of a URL or lookup key"
    )
    SHORT_CODE_LENGTH: int = Field(
        default=10,
        description="Number of base64 characters kept as the short code"
    )


settings = Settings()
