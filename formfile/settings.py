"""
Configuration for formfile.

Defaults used by the conversion helpers. They are read from FORMFILE_*
environment variables at import time; change them at runtime with configure().
"""

import logging
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .logger import configure_logging, reset_logging


class FormFileSettings(BaseSettings):
    """Defaults for the conversion helpers and the package logger."""

    model_config = SettingsConfigDict(env_prefix="FORMFILE_", extra="forbid")

    default_name: str = Field(default="", description="Form field name for rebuilt uploads")
    default_filename: str = Field(default="", description="Filename for rebuilt uploads")
    default_content_type: str = "application/octet-stream"
    chunk_size: int = Field(default=64 * 1024, gt=0, description="Bytes per read/write when copying")

    log_level: str = "WARNING"
    json_logs: bool = False
    log_file: Optional[str] = None
    environment: str = "production"
    show_environment: bool = False

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        value = value.upper()
        if not isinstance(logging.getLevelName(value), int):
            raise ValueError(f"Unknown log level: {value}")
        return value


_settings = FormFileSettings()


def get_settings() -> FormFileSettings:
    return _settings


def configure(**overrides) -> FormFileSettings:
    """
    Validate and install new settings on top of the active ones.

    Raises:
        pydantic.ValidationError: If an override has an invalid value
    """
    global _settings
    _settings = FormFileSettings(**{**_settings.model_dump(), **overrides})
    configure_logging(_settings)
    return _settings


def reset_settings() -> FormFileSettings:
    """Reload settings from the environment and unconfigure the package logger."""
    global _settings
    _settings = FormFileSettings()
    reset_logging()
    return _settings
