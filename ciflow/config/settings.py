"""Engine settings loaded from ``CIFLOW_*`` environment variables.

Settings are read once per ``main`` invocation using Pydantic Settings:

    CIFLOW_LOG_LEVEL=debug   overrides the root workflow's declared level
    CIFLOW_LOG_FILE=ci.log   additionally writes the log to a file
    CIFLOW_NO_COLOR=1        disables colored console output
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..utils.logging_factory import parse_level


class EngineSettings(BaseSettings):
    """Ambient configuration for a pipeline run."""

    model_config = SettingsConfigDict(env_prefix="CIFLOW_", extra="ignore")

    log_level: Optional[str] = None
    log_file: Optional[Path] = None
    no_color: bool = False

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: Optional[str]) -> Optional[str]:
        """Reject names that are not standard logging levels."""
        if v is not None:
            parse_level(v)
            return v.strip().upper()
        return v

    def resolve_level(self, declared: int) -> int:
        """Return the override level if configured, else ``declared``."""
        if self.log_level is None:
            return declared
        return parse_level(self.log_level)
