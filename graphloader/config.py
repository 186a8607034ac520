"""
Configuration management using Pydantic BaseSettings.

Naming conventions and transport defaults are externalized here.
Values can be overridden via environment variables (e.g., GRAPHLOADER_REQUEST_TIMEOUT_S=10).

Usage:
    from graphloader.config import settings

    manifest_url = base_dir + "/" + settings.DEFAULT_MANIFEST_NAME
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
    """
    Main application configuration.

    All values can be overridden via environment variables prefixed with 'GRAPHLOADER_'.
    Example: GRAPHLOADER_LOG_FORMAT=text
    """

    model_config = SettingsConfigDict(
        env_prefix="GRAPHLOADER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Artifact Naming Conventions
    DEFAULT_MANIFEST_NAME: str = Field(
        default="weights_manifest.json",
        description="File name of the weights manifest next to a binary frozen graph",
        min_length=1,
    )
    DEFAULT_MODEL_NAME: str = Field(
        default="model.json",
        description="File name of the JSON graph inside a TF-Hub module",
        min_length=1,
    )
    TFHUB_SEARCH_PARAM: str = Field(
        default="?tfjs-format=file",
        description="Query string asking TF-Hub for the raw model file",
    )

    # Transport
    REQUEST_TIMEOUT_S: float = Field(
        default=60.0,
        description="Timeout in seconds for each HTTP request",
        gt=0.0,
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level: DEBUG|INFO|WARNING|ERROR|CRITICAL",
    )
    LOG_FORMAT: str = Field(
        default="json",
        description="Log format: json|text",
    )

    # Application Settings
    APP_NAME: str = Field(
        default="graphloader",
        description="Application name for logging",
    )
    APP_VERSION: str = Field(
        default="1.0.0",
        description="Application version",
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper_v = v.upper()
        if upper_v not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return upper_v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format is supported."""
        valid_formats = {"json", "text"}
        lower_v = v.lower()
        if lower_v not in valid_formats:
            raise ValueError(f"LOG_FORMAT must be one of {valid_formats}")
        return lower_v


# Singleton instance - import this in other modules
settings = AppConfig()


def get_settings() -> AppConfig:
    """
    Get the application settings instance.

    This function is useful for dependency injection patterns.

    Returns:
        AppConfig: The application configuration instance.
    """
    return settings
