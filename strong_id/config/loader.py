"""Settings loading with deterministic precedence.

The cascade is always:
1) Explicit params (CLI flags, test overrides)
2) Environment variables
3) ~/.config/strong_id/strong_id.yaml
4) Built-in model defaults

Environment variable format:
- Prefix: ``STRONG_ID_``
- Nested keys: ``__`` separator
- Example: ``STRONG_ID_PREFIX__DELIMITED=false`` -> ``prefix.delimited = False``
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from pydantic_settings import SettingsConfigDict

from .models import DEFAULT_CONFIG_PATH, PrefixSettings, StrongIdSettings

_active_settings: StrongIdSettings | None = None
_DEFAULT_PREFIX_SETTINGS = PrefixSettings()


def load_settings(
    *,
    cli_params: Mapping[str, Any] | None = None,
    config_path: str | Path | None = None,
) -> StrongIdSettings:
    """Load settings by applying the standard precedence cascade."""
    resolved = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH

    class _FileBoundSettings(StrongIdSettings):
        model_config = SettingsConfigDict(yaml_file=resolved)

    return _FileBoundSettings(**dict(cli_params or {}))


def get_settings() -> StrongIdSettings:
    """Return process-wide settings, loading them on first use."""
    global _active_settings
    if _active_settings is None:
        _active_settings = load_settings()
    return _active_settings


def get_prefix_settings() -> PrefixSettings:
    """Return prefix settings without reading the environment or config files.

    Library code validating prefixes only sees settings an application has
    activated; otherwise the built-in defaults apply.
    """
    if _active_settings is None:
        return _DEFAULT_PREFIX_SETTINGS
    return _active_settings.prefix


def activate_settings(settings: StrongIdSettings) -> None:
    """Make ``settings`` the process-wide settings returned by ``get_settings``."""
    global _active_settings
    _active_settings = settings


def reset_settings() -> None:
    """Drop active settings so the next ``get_settings`` call reloads them."""
    global _active_settings
    _active_settings = None
