# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Application configuration settings using Pydantic Settings.

This module provides centralized configuration for the syllabus editor.
Settings are loaded from environment variables with sensible defaults.

The Settings class is the main entry point and aggregates all subsettings.
A singleton instance is provided via get_settings() for dependency injection.

Example:
    >>> from src.core.config.settings import get_settings
    >>> settings = get_settings()
    >>> print(settings.syllabus.max_weeks)
    20
"""

from functools import lru_cache
from typing import Literal, Self

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PortalSettings(BaseSettings):
    """Course portal API configuration.

    The portal backend owns course records. The editor reads a course
    and writes its syllabus back through this API.

    Attributes:
        base_url: Base URL of the portal API server.
        api_key: Optional API key, sent as X-API-Key when set.
        timeout: Request timeout in seconds.
    """

    model_config = SettingsConfigDict(
        env_prefix="PORTAL_",
        extra="ignore",
    )

    base_url: str = "http://127.0.0.1:8000"
    api_key: SecretStr = SecretStr("")
    timeout: float = 30.0


class SyllabusSettings(BaseSettings):
    """Syllabus editor configuration.

    Attributes:
        max_weeks: Realistic upper bound of course weeks offered by the
            week picker. Not a hard platform limit.
    """

    model_config = SettingsConfigDict(
        env_prefix="SYLLABUS_",
        extra="ignore",
    )

    max_weeks: int = Field(default=20, ge=1)


class Settings(BaseSettings):
    """Main application settings aggregating all subsettings.

    Use get_settings() to obtain a cached singleton instance.

    Attributes:
        environment: Current environment (development, staging, production).
        debug: Enable debug mode.
        log_level: Logging level.
        portal: Course portal API settings.
        syllabus: Syllabus editor settings.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    # Environment
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = True
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "DEBUG"

    # Subsettings - loaded with their own env prefixes
    portal: PortalSettings = Field(default_factory=PortalSettings)
    syllabus: SyllabusSettings = Field(default_factory=SyllabusSettings)

    @model_validator(mode="after")
    def validate_production_settings(self) -> Self:
        """Validate that production settings are properly configured.

        Raises:
            ValueError: If running in production without a portal API key.
        """
        if self.environment == "production":
            if not self.portal.api_key.get_secret_value():
                raise ValueError(
                    "Portal API key must be set in production. "
                    "Set PORTAL_API_KEY environment variable."
                )
        return self

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call clear_settings_cache() if you need to reload settings.

    Returns:
        Cached Settings instance.
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache.

    Call this if you need to reload settings from environment.
    Useful for testing or dynamic configuration updates.
    """
    get_settings.cache_clear()
