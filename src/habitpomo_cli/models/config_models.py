"""Configuration models for habitpomo-cli."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from habitpomo_cli.utils.calendar import get_system_timezone, resolve_timezone
from habitpomo_cli.utils.logger import DEFAULT_LEVEL


class OutputConfig(BaseModel):
    """Output configuration."""

    format: Literal["pretty", "json", "yaml"] = Field(default="pretty")
    color: bool = Field(default=True)


class FocusConfig(BaseModel):
    """Full-screen timer configuration."""

    refresh_per_second: int = Field(default=4, ge=1, le=30)
    bell: bool = Field(default=True)


class AppConfig(BaseModel):
    """Main habitpomo configuration"""

    timezone: str = Field(
        default_factory=get_system_timezone,
        description="IANA zone that decides where 'today' starts and ends",
    )
    data_file: str | None = Field(
        default=None, description="Habit storage file (defaults to the data dir)"
    )
    output: OutputConfig = Field(default_factory=OutputConfig)
    focus: FocusConfig = Field(default_factory=FocusConfig)
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default=DEFAULT_LEVEL, description="Threshold for the log file"
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        """Reject zone names zoneinfo does not know."""
        resolve_timezone(v)
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper() if isinstance(v, str) else v
