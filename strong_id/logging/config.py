"""Logging setup for the strong_id CLI and embedding applications.

Library modules only call ``get_logger``; handlers are installed by whoever
owns the process (the CLI, or an application calling ``configure_logging``).
Records go to stderr so they never interleave with identifiers on stdout.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import IO, Any

from . import fields
from .context import bind_context, get_context


class ContextFilter(logging.Filter):
    """Inject bound context fields into each log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.context = get_context()
        return True


class JsonFormatter(logging.Formatter):
    """One JSON object per record, keyed by the names in ``fields``.

    Core fields are written last so bound context can never overwrite them.
    A logged exception contributes its traceback and, for identifier errors,
    the stable error code.
    """

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = dict(getattr(record, "context", None) or {})
        payload.update(
            {
                fields.TIMESTAMP: _record_time(record),
                fields.LEVEL: record.levelname,
                fields.LOGGER: record.name,
                fields.MESSAGE: record.getMessage(),
            }
        )

        if record.exc_info and record.exc_info[1] is not None:
            code = getattr(record.exc_info[1], "code", None)
            if isinstance(code, str):
                payload.setdefault(fields.ERROR_CODE, code)
            payload[fields.EXCEPTION] = self.formatException(record.exc_info)

        return json.dumps(payload, default=str, sort_keys=True)


class PlainFormatter(logging.Formatter):
    """Terminal formatter: ``HH:MM:SS.mmm LEVEL logger: message key=value ...``."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s.%(msecs)03d %(levelname)-7s %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def formatMessage(self, record: logging.LogRecord) -> str:
        # Context stays on the first line, ahead of any traceback.
        line = super().formatMessage(record)
        context = getattr(record, "context", None) or {}
        pairs = [f"{key}={_quote(value)}" for key, value in sorted(context.items())]
        return " ".join([line, *pairs])


def _record_time(record: logging.LogRecord) -> str:
    created = datetime.fromtimestamp(record.created, tz=UTC)
    return created.isoformat(timespec="milliseconds")


def _quote(value: object) -> str:
    text = str(value)
    if not text or any(char.isspace() or char in '"=' for char in text):
        return json.dumps(text)
    return text


def configure_logging(
    *,
    level: str = "WARNING",
    json_output: bool = False,
    service: str | None = None,
    environment: str | None = None,
    stream: IO[str] | None = None,
) -> None:
    """Configure root logging with a single handler.

    Idempotent: existing root handlers are replaced so repeated calls do not
    duplicate output.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level.upper())

    handler = logging.StreamHandler(stream=stream if stream is not None else sys.stderr)
    handler.setLevel(level.upper())
    handler.addFilter(ContextFilter())
    handler.setFormatter(JsonFormatter() if json_output else PlainFormatter())
    root.addHandler(handler)

    bind_context(**{fields.SERVICE: service, fields.ENVIRONMENT: environment})


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger using Python's standard logging hierarchy."""
    return logging.getLogger(name)
