"""Exception normalization into ``ErrorDetail`` values."""

from __future__ import annotations

from dataclasses import fields, is_dataclass

from . import codes
from .exceptions import StrongIdError
from .factories import internal_error, validation_error
from .types import ErrorDetail


def exception_to_error(exc: Exception) -> ErrorDetail:
    """Normalize a Python exception into an ``ErrorDetail``.

    Identifier errors keep their own code and expose their fields as string
    metadata. Other ``ValueError`` instances are treated as bad arguments and
    everything else is reported as an unexpected internal failure.
    """
    metadata = {"exception_type": type(exc).__name__}

    if isinstance(exc, StrongIdError):
        metadata.update(_error_fields(exc))
        return validation_error(str(exc), code=exc.code, metadata=metadata)

    if isinstance(exc, (ValueError, OverflowError)):
        return validation_error(str(exc), code=codes.INVALID_ARGUMENT, metadata=metadata)

    return internal_error(
        str(exc) or "unexpected exception",
        code=codes.UNEXPECTED_EXCEPTION,
        metadata=metadata,
    )


def _error_fields(exc: StrongIdError) -> dict[str, str]:
    """Return dataclass fields of one identifier error as strings."""
    if not is_dataclass(exc):
        return {}
    return {item.name: str(getattr(exc, item.name)) for item in fields(exc)}
