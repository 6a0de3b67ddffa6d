"""Configuration loading for the Cottontail mock engine.

This module provides centralized configuration management:
- Load settings from environment variables and .env files
- Validate configuration using pydantic
- Provide typed access to all settings
- Configure the package logger for test runs
"""

import logging
import sys
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOGGER_NAME = "cottontail"


class Settings(BaseSettings):
    """Engine configuration loaded from environment.

    Uses pydantic-settings for environment variable handling with
    .env file support via python-dotenv.
    """

    model_config = SettingsConfigDict(
        env_prefix="COTTONTAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Default value generation
    random_seed: int | None = Field(
        default=None,
        description="Seed for generated default values (unset draws from the OS)",
    )
    string_length: int = Field(
        default=12,
        description="Length of generated str and bytes values",
    )
    int_min: int = Field(
        default=0,
        description="Lower bound for generated integers",
    )
    int_max: int = Field(
        default=1000,
        description="Upper bound for generated integers",
    )
    collection_size: int = Field(
        default=2,
        description="Number of items in generated collections",
    )
    max_depth: int = Field(
        default=4,
        description="Nesting limit for structurally generated values",
    )

    # Logging configuration
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level",
    )
    log_format: Literal["json", "text"] = Field(
        default="text",
        description="Log format",
    )

    @field_validator("string_length", "collection_size")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Ensure sizes are positive."""
        if v <= 0:
            raise ValueError("sizes must be positive")
        return v

    @field_validator("max_depth")
    @classmethod
    def validate_max_depth(cls, v: int) -> int:
        """Ensure nesting limit is non-negative."""
        if v < 0:
            raise ValueError("max_depth must be non-negative")
        return v

    @model_validator(mode="after")
    def validate_int_range(self) -> "Settings":
        """Ensure the integer range is not inverted."""
        if self.int_min > self.int_max:
            raise ValueError(
                f"int_min ({self.int_min}) cannot exceed int_max ({self.int_max})"
            )
        return self


def load_settings(env_file: str | None = None) -> Settings:
    """Load engine settings from environment.

    Args:
        env_file: Optional path to .env file. If not provided,
                 uses the default .env in the current directory.

    Returns:
        Validated Settings instance.

    Raises:
        ValidationError: If settings validation fails.
    """
    if env_file:
        return Settings(_env_file=env_file)  # type: ignore[call-arg]
    return Settings()


def configure_logging(log_level: str, log_format: str) -> logging.Logger:
    """Route the engine's log records to stderr.

    Only the ``cottontail`` logger is configured, so the host test run
    keeps its own root logging setup. Calling this again replaces the
    handler installed by the previous call.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_format: Log format (json, text).

    Returns:
        The configured package logger.
    """
    level = getattr(logging, log_level, logging.INFO)

    if log_format == "json":
        format_str = '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}'
    else:
        format_str = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

    package_logger = logging.getLogger(LOGGER_NAME)
    for handler in list(package_logger.handlers):
        if handler.get_name() == LOGGER_NAME:
            package_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(LOGGER_NAME)
    handler.setFormatter(logging.Formatter(format_str))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    package_logger.propagate = False
    return package_logger


__all__ = ["LOGGER_NAME", "Settings", "configure_logging", "load_settings"]
