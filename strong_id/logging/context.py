"""Context propagation helpers for structured logging.

Fields bound here are attached to every record emitted in the current
execution context (thread or task), via ``contextvars``.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping

_LOG_CONTEXT: ContextVar[dict[str, str]] = ContextVar(
    "strong_id_log_context", default={}
)


def get_context() -> dict[str, str]:
    """Return a shallow copy of current logging context."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: object) -> None:
    """Bind values into the current logging context, skipping ``None``."""
    merged = {**_LOG_CONTEXT.get()}
    merged.update({str(key): str(value) for key, value in values.items() if value is not None})
    _LOG_CONTEXT.set(merged)


def clear_context(*keys: str) -> None:
    """Clear selected keys or the entire logging context."""
    if not keys:
        _LOG_CONTEXT.set({})
        return
    _LOG_CONTEXT.set({key: value for key, value in _LOG_CONTEXT.get().items() if key not in keys})


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Temporarily bind logging context for the duration of a block."""
    token = _LOG_CONTEXT.set(get_context())
    try:
        bind_context(**dict(values))
        yield
    finally:
        _LOG_CONTEXT.reset(token)
