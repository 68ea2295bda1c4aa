"""Shared identifier capability and formatting helpers."""

from __future__ import annotations

import logging
from typing import Protocol, Self, TypeVar

from strong_id.errors import StrongIdError
from strong_id.logging import fields, get_logger, log_context
from strong_id.prefix import DELIMITER
from strong_id.values import Id

_LOGGER = get_logger(__name__)

_T_co = TypeVar("_T_co", bound=Id, covariant=True)


class StrongIdLike(Protocol[_T_co]):
    """Capability offered by every identifier type, dynamic or fixed-prefix."""

    @property
    def prefix(self) -> str | None:
        """Return the prefix text, or ``None`` for plain identifiers."""

    @property
    def id(self) -> _T_co:
        """Return the suffix value."""

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse the canonical string form."""


def format_identifier(prefix: str | None, suffix: Id) -> str:
    """Return the canonical ``prefix_suffix`` (or bare ``suffix``) string."""
    if prefix is None:
        return suffix.encode()
    return f"{prefix}{DELIMITER}{suffix.encode()}"


def split_identifier(text: str) -> tuple[str, str] | None:
    """Split on the last delimiter, returning ``None`` when there is none."""
    left, separator, right = text.rpartition(DELIMITER)
    if not separator:
        return None
    return left, right


def log_rejected_parse(id_type: type, text: str, error: StrongIdError) -> None:
    """Emit one DEBUG record describing a rejected parse."""
    if not _LOGGER.isEnabledFor(logging.DEBUG):
        return
    with log_context(
        {
            fields.EVENT: fields.PARSE_REJECTED_EVENT,
            fields.ID_TYPE: id_type.__qualname__,
            fields.ERROR_CODE: error.code,
            fields.INPUT_LENGTH: len(text),
        }
    ):
        _LOGGER.debug("Identifier parse rejected: %s", error)
