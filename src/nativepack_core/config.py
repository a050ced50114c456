"""
Configuration Management for nativepack.

Provides centralized, type-safe configuration loading using Pydantic Settings.
Supports environment variables, .env files, and sensible defaults for zero-config operation.

Copyright (c) 2025 Goncharenko Anton aka alienxs2
License: MIT
"""

from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class NativepackSettings(BaseSettings):
    """
    Process-wide settings for nativepack.

    Configuration is loaded with the following priority (highest to lowest):
    1. System environment variables (``NATIVEPACK_`` prefix)
    2. .env file in the working directory
    3. Hardcoded default values

    Per-build options (platform, local chunk rules, remote output) are not
    settings: they live on OutputPluginConfig and the invocation descriptor.

    Example:
        ```python
        from nativepack_core.config import settings

        print(settings.cli_options_env_key)  # 'NATIVEPACK_CLI_OPTIONS'
        ```
    """

    # ========================================
    # LOGGING CONFIGURATION
    # ========================================

    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_format: str = Field(default="console", description="Log format (json, console)")

    # ========================================
    # BUILD INVOCATION
    # ========================================

    cli_options_env_key: str = Field(
        default="NATIVEPACK_CLI_OPTIONS",
        min_length=1,
        description="Environment variable holding the JSON build invocation descriptor",
    )

    default_entry: str = Field(
        default="main", min_length=1, description="Entry chunk name when the plugin sets none"
    )

    # ========================================
    # DISTRIBUTION
    # ========================================

    max_concurrent_copies: int = Field(
        default=16, ge=1, le=256, description="Maximum file copies in flight per processor"
    )

    # ========================================
    # VALIDATORS
    # ========================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate log level is one of allowed values.

        Raises:
            ValueError: If log level not in allowed values
        """
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got '{v}'")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """
        Validate log format is one of allowed values.

        Raises:
            ValueError: If log format not in allowed values
        """
        allowed = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got '{v}'")
        return v_lower

    model_config = SettingsConfigDict(
        env_prefix="NATIVEPACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_assignment=True,
        extra="ignore",
    )


def get_config_summary(settings: NativepackSettings) -> Dict[str, Any]:
    """
    Get configuration summary for logging/debugging.

    Args:
        settings: NativepackSettings instance

    Returns:
        Configuration summary grouped by category
    """
    return {
        "logging": {
            "level": settings.log_level,
            "format": settings.log_format,
        },
        "build": {
            "cli_options_env_key": settings.cli_options_env_key,
            "default_entry": settings.default_entry,
        },
        "distribution": {
            "max_concurrent_copies": settings.max_concurrent_copies,
        },
    }


# Singleton instance - instantiated once at module import
settings = NativepackSettings()
