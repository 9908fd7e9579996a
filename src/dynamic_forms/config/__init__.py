"""Settings management."""

from dynamic_forms.config.settings import (
    Settings,
    build_registry,
    get_settings,
    load_settings,
    reset_settings_cache,
)

__all__ = [
    "Settings",
    "build_registry",
    "get_settings",
    "load_settings",
    "reset_settings_cache",
]
