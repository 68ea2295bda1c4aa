"""Public API for strong identifier configuration."""

from .loader import (
    activate_settings,
    get_prefix_settings,
    get_settings,
    load_settings,
    reset_settings,
)
from .models import (
    DEFAULT_CONFIG_PATH,
    LoggingSettings,
    PrefixSettings,
    StrongIdSettings,
)

__all__ = [
    "activate_settings",
    "DEFAULT_CONFIG_PATH",
    "LoggingSettings",
    "PrefixSettings",
    "StrongIdSettings",
    "get_prefix_settings",
    "get_settings",
    "load_settings",
    "reset_settings",
]
