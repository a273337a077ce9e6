"""
Configuration management using Pydantic Settings.

This module provides type-safe, validated configuration loading from
environment variables. Every field has a default so the router can be
mounted without any environment setup.

Architecture:
- Flat Settings structure (no nesting)
- All config loaded from environment variables
- Type validation via Pydantic

Usage:
    from cms_router.core.config import settings

    prefix = settings.api_prefix

    if settings.simple_responses:
        # find-many returns the bare document list
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from cms_router.core.enums import Environment


class Settings(BaseSettings):
    """
    Main adapter settings (flat structure).

    Configuration precedence:
        1. Environment variables
        2. Default values

    Returns:
        Settings: Adapter configuration loaded from environment.
    """

    # Environment detection
    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment (development, testing, ci, production)",
    )

    # Core application settings
    debug: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Application metadata
    app_name: str = Field(
        default="cms-router",
        description="Application name",
    )
    app_version: str = Field(
        default="0.1.0",
        description="Application version",
    )

    # Routing
    api_prefix: str = Field(
        default="/api",
        description="Prefix the collection and auth routes are mounted under",
    )
    auth_prefix: str = Field(
        default="/auth",
        description="Additional prefix that custom engine endpoints are served under",
    )

    # Response shaping
    simple_responses: bool = Field(
        default=False,
        description="Return only the document list from find-many instead of the paginated envelope",
    )

    # Authentication
    auth_collection: str = Field(
        default="users",
        description="Collection holding user records when the token names none",
    )

    # Query defaults
    default_find_depth: int = Field(
        default=0,
        description="Relationship depth for find-many and count when none is requested",
    )
    default_find_by_id_depth: int = Field(
        default=2,
        description="Relationship depth for single-document lookups when none is requested",
    )

    # Custom endpoints
    fallback_locale: str = Field(
        default="en",
        description="Locale handed to custom endpoint handlers",
    )

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("api_prefix", "auth_prefix")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        """
        Normalize a route prefix to a leading slash and no trailing slash.

        Args:
            v: Prefix string.

        Returns:
            str: Normalized prefix.

        Raises:
            ValueError: If the prefix is empty or only slashes.
        """
        stripped = v.strip().strip("/")
        if not stripped:
            raise ValueError("route prefix must contain at least one path segment")
        return f"/{stripped}"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate and upper-case the log level name.

        Args:
            v: Log level name.

        Returns:
            str: Upper-cased log level.

        Raises:
            ValueError: If the level is not a standard logging level.
        """
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level: {v}")
        return level

    @field_validator("default_find_depth", "default_find_by_id_depth")
    @classmethod
    def validate_depth(cls, v: int) -> int:
        """Reject negative depths."""
        if v < 0:
            raise ValueError("depth must be zero or greater")
        return v

    # Convenience properties for environment checks
    @property
    def is_development(self) -> bool:
        """
        Check if running in development environment.

        Returns:
            bool: True if environment is DEVELOPMENT, False otherwise.
        """
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_testing(self) -> bool:
        """
        Check if running in testing environment.

        Returns:
            bool: True if environment is TESTING, False otherwise.
        """
        return self.environment == Environment.TESTING

    @property
    def is_production(self) -> bool:
        """
        Check if running in production environment.

        Returns:
            bool: True if environment is PRODUCTION, False otherwise.
        """
        return self.environment == Environment.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance.
    """
    return Settings()


# Global settings instance (singleton pattern)
settings = get_settings()
