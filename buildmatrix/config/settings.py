"""Application settings with environment variable support."""

import logging
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class BuildMatrixSettings(BaseSettings):
    """Settings for the buildmatrix command line.

    Precedence order (highest to lowest):
    1. Environment variables (BUILDMATRIX_*)
    2. Constructor arguments
    3. .env file
    4. Default values
    """

    model_config = SettingsConfigDict(
        env_prefix="BUILDMATRIX_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: Any,
        env_settings: Any,
        dotenv_settings: Any,
        file_secret_settings: Any,
    ) -> tuple[Any, ...]:
        """Environment variables take precedence over constructor arguments."""
        return (
            env_settings,
            init_settings,
            dotenv_settings,
            file_secret_settings,
        )

    log_level: str = Field(default="WARNING", description="Default log level")
    json_logs: bool = Field(default=False, description="Render console logs as JSON")
    log_file: Path | None = Field(default=None, description="Optional JSON log file")
    definition_file: Path | None = Field(
        default=None, description="Matrix definition used when none is given"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is recognized."""
        upper_v = v.strip().upper()
        if upper_v not in VALID_LOG_LEVELS:
            raise ValueError(f"Log level must be one of {VALID_LOG_LEVELS}")
        return upper_v

    def get_log_level_int(self) -> int:
        """Get log level as integer for logging module."""
        return int(getattr(logging, self.log_level, logging.WARNING))


def create_settings(**overrides: Any) -> BuildMatrixSettings:
    """Create settings, letting the environment override ``overrides``."""
    return BuildMatrixSettings(**overrides)
