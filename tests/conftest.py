"""Pytest configuration for the strong_id test suite."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest

from strong_id.config import StrongIdSettings, reset_settings
from strong_id.logging import clear_context


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Iterator[None]:
    """Keep user config files and ``STRONG_ID_*`` variables out of every test."""
    for key in ("STRONG_ID_CONFIG", "STRONG_ID_PREFIX__DELIMITED", "STRONG_ID_LOGGING__LEVEL"):
        monkeypatch.delenv(key, raising=False)
    missing = tmp_path / "missing.yaml"
    # The model captured the default path when its class was created.
    monkeypatch.setitem(StrongIdSettings.model_config, "yaml_file", missing)
    monkeypatch.setattr("strong_id.config.loader.DEFAULT_CONFIG_PATH", missing)
    reset_settings()
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    reset_settings()
    clear_context()
    root.handlers[:] = handlers
    root.setLevel(level)
