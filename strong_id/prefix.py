"""Prefix grammar for identifiers.

A prefix is 1-63 lowercase ASCII letters. In delimited mode (the default,
see ``prefix.delimited`` in activated settings) it may also contain ``_``,
which is why identifiers are split on their last underscore.
"""

from __future__ import annotations

from typing import Self

from strong_id.config import get_prefix_settings
from strong_id.errors import (
    IncorrectPrefixCharacterError,
    PrefixExpectedError,
    PrefixTooLongError,
)

MAX_PREFIX_LENGTH = 63
DELIMITER = "_"


class Prefix(str):
    """Validated prefix text.

    Behaves exactly like the ``str`` it wraps for comparison, hashing and
    formatting; construction is the only place validation happens.
    """

    __slots__ = ()

    def __new__(cls, text: str, *, delimited: bool | None = None) -> Self:
        _check_prefix(text, _resolve_delimited(delimited))
        return super().__new__(cls, text)

    def __repr__(self) -> str:
        return f"Prefix({str.__repr__(self)})"


def validate_prefix(text: str, *, delimited: bool | None = None) -> Prefix:
    """Validate ``text`` as a required prefix.

    Raises ``PrefixTooLongError`` for 64+ UTF-8 bytes,
    ``IncorrectPrefixCharacterError`` for the first disallowed character, and
    ``PrefixExpectedError`` for empty text.
    """
    if isinstance(text, Prefix) and delimited is None:
        return text
    return Prefix(text, delimited=delimited)


def _check_prefix(text: str, delimited: bool) -> None:
    length = len(text.encode("utf-8"))
    if length > MAX_PREFIX_LENGTH:
        raise PrefixTooLongError(length=length)

    for char in text:
        if delimited and char == DELIMITER:
            continue
        if not "a" <= char <= "z":
            raise IncorrectPrefixCharacterError(character=char)

    if not text:
        raise PrefixExpectedError()


def _resolve_delimited(delimited: bool | None) -> bool:
    if delimited is not None:
        return delimited
    return get_prefix_settings().delimited
