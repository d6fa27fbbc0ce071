#!/usr/bin/env python3
"""
Purpose:
    Validates the merged strictdto configuration into an immutable
    EngineSettings model and provides a module-level accessor for it, with
    optional reload and overrides.
"""
from __future__ import annotations

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from strictdto.core.config import load_config
from strictdto.core.constants import DEFAULT_MAX_DEPTH
from strictdto.core.exceptions import ConfigError
from strictdto.core.formatting import format_pydantic_errors_simple

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# --- Data model --- #

class LoggingSettings(BaseModel):
    """Logging section of the configuration."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = Field(default="WARNING", description="Minimum level emitted by strictdto loggers.")
    json_output: bool = Field(default=False, alias="json", description="Render log events as JSON.")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: Any) -> Any:
        """Accept any casing/whitespace for level names."""
        return v.strip().upper() if isinstance(v, str) else v


class EngineSettings(BaseModel):
    """Immutable, validated view of the strictdto configuration."""
    model_config = ConfigDict(frozen=True, extra="ignore")

    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1, description="Maximum nested construction depth.")
    cache_schemas: bool = Field(default=True, description="Cache compiled schemas per DTO class.")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @property
    def log_level(self) -> str:
        return self.logging.level

    @property
    def log_json(self) -> bool:
        return self.logging.json_output

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "EngineSettings":
        """
        Validate a merged configuration dict.

        Raises:
            ConfigError: with one line per pydantic error.
        """
        try:
            return cls.model_validate(config)
        except ValidationError as e:
            raise ConfigError(format_pydantic_errors_simple(e)) from e


# --- Module state --- #

_SETTINGS: Optional[EngineSettings] = None


# --- Public API --- #

def get_settings(
    *,
    force_reload: bool = False,
    config_override: Optional[Dict[str, Any]] = None,
) -> EngineSettings:
    """
    Return the process-wide `EngineSettings`.

    Args:
        force_reload:
            If True, rebuilds the settings even if already cached.
        config_override:
            Optional configuration dict to use instead of `load_config()`.

    Returns:
        A validated `EngineSettings` instance.
    """
    global _SETTINGS
    if _SETTINGS is None or force_reload or config_override:
        _SETTINGS = EngineSettings.from_config(config_override or load_config())
    return _SETTINGS
