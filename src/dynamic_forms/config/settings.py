"""Engine settings schema and loader.

Settings come from the environment (after loading a .env file if present):

    DYNAMIC_FORMS_SCHEMA_FILE         YAML file with custom form types
    DYNAMIC_FORMS_LOG_LEVEL           DEBUG, INFO, WARNING, ERROR or CRITICAL
    DYNAMIC_FORMS_PROGRESS_PRECISION  decimal places when rendering progress
"""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from dynamic_forms.runtime.registry import SchemaRegistry

logger = logging.getLogger(__name__)

ENV_PREFIX = "DYNAMIC_FORMS_"
VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class Settings(BaseModel):
    """Runtime settings for the form engine.

    Attributes:
        schema_file: YAML file with form types; None uses the built-in ones.
        log_level: Root log level for entry points that configure logging.
        progress_precision: Decimal places for displayed progress; None means raw.
    """

    schema_file: Optional[Path] = Field(
        default=None,
        description="YAML file with form type definitions",
    )
    log_level: str = Field(default="INFO", description="Logging level name")
    progress_precision: Optional[int] = Field(
        default=None,
        ge=0,
        le=10,
        description="Decimal places used when rendering progress",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a standard level name."""
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Unknown log level '{v}'. Valid levels: {sorted(VALID_LOG_LEVELS)}"
            )
        return level

    def format_progress(self, progress: float) -> str:
        """Render a progress value as a percentage string."""
        if self.progress_precision is None:
            return f"{progress}%"
        return f"{progress:.{self.progress_precision}f}%"


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Load settings from environment variables.

    Args:
        env: Mapping to read instead of os.environ. When omitted, a .env
            file is loaded first (existing variables win).

    Returns:
        Validated Settings.

    Raises:
        ValueError: If any variable holds an invalid value.
    """
    if env is None:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        env = os.environ

    raw = {}
    schema_file = env.get(f"{ENV_PREFIX}SCHEMA_FILE")
    if schema_file:
        raw["schema_file"] = schema_file
    log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL")
    if log_level:
        raw["log_level"] = log_level
    precision = env.get(f"{ENV_PREFIX}PROGRESS_PRECISION")
    if precision:
        raw["progress_precision"] = precision

    try:
        settings = Settings(**raw)
    except ValidationError as e:
        raise ValueError(f"Invalid {ENV_PREFIX}* settings: {e}")

    logger.debug(f"Loaded settings: {settings.model_dump()}")
    return settings


def build_registry(settings: Settings) -> SchemaRegistry:
    """Registry from the configured schema file, or the built-in form types."""
    if settings.schema_file is None:
        return SchemaRegistry.default()
    logger.debug(f"Using form types from {settings.schema_file}")
    return SchemaRegistry.from_yaml(settings.schema_file)


# Cached settings (loaded once per process)
_cached_settings: Optional[Settings] = None


def get_settings(force_reload: bool = False) -> Settings:
    """Get the current settings (cached).

    Args:
        force_reload: If True, re-read the environment even if cached.
    """
    global _cached_settings

    if force_reload or _cached_settings is None:
        _cached_settings = load_settings()

    return _cached_settings


def reset_settings_cache() -> None:
    """Reset the settings cache."""
    global _cached_settings
    _cached_settings = None
