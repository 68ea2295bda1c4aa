"""Typed exceptions raised while encoding, decoding, or parsing identifiers.

The set is closed: every failure of the codec, prefix validation, or the
identifier grammar is one of the classes below. All of them are
``ValueError`` subclasses so generic validation layers treat them as bad input.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar

from . import codes


@dataclass(unsafe_hash=True)
class StrongIdError(ValueError):
    """Base error type for identifier failures."""

    code: ClassVar[str] = codes.INVALID_ARGUMENT

    @property
    def message(self) -> str:
        """Return human-readable error message."""
        return "invalid identifier"

    def __str__(self) -> str:
        return self.message

    def __reduce__(self) -> tuple[Any, ...]:
        # BaseException pickles ``self.args``, which the dataclass init never sets.
        return type(self), tuple(getattr(self, item.name) for item in fields(self))


@dataclass(unsafe_hash=True)
class Base32Error(StrongIdError):
    """Failure raised by the base32 codec."""


@dataclass(unsafe_hash=True)
class InvalidByteError(Base32Error):
    """Input contains a character outside the base32 alphabet."""

    code: ClassVar[str] = codes.INVALID_BYTE

    character: str

    @property
    def message(self) -> str:
        return f"invalid base32 character `{self.character}`"


@dataclass(unsafe_hash=True)
class InvalidFirstByteError(Base32Error):
    """Decoded magnitude does not fit in the target width."""

    code: ClassVar[str] = codes.INVALID_FIRST_BYTE

    @property
    def message(self) -> str:
        return "first character is out of range for the target width"


@dataclass(unsafe_hash=True)
class InvalidLengthError(StrongIdError):
    """Encoded value length differs from the fixed length of its type."""

    code: ClassVar[str] = codes.INVALID_LENGTH

    expected: int
    found: int

    @property
    def message(self) -> str:
        return f"invalid length. expected {self.expected}, found {self.found}"


@dataclass(unsafe_hash=True)
class MissingPrefixError(StrongIdError):
    """A prefix was expected, but was not found."""

    code: ClassVar[str] = codes.MISSING_PREFIX

    expected: str

    @property
    def message(self) -> str:
        return f"expected prefix `{self.expected}`"


@dataclass(unsafe_hash=True)
class InvalidPrefixError(StrongIdError):
    """The parsed prefix did not match the configured prefix."""

    code: ClassVar[str] = codes.INVALID_PREFIX

    expected: str
    found: str

    @property
    def message(self) -> str:
        return f"invalid prefix. expected {self.expected}, found {self.found}"


@dataclass(unsafe_hash=True)
class NoPrefixExpectedError(StrongIdError):
    """A prefix was given, but none was expected."""

    code: ClassVar[str] = codes.NO_PREFIX_EXPECTED

    found: str

    @property
    def message(self) -> str:
        return f"found prefix `{self.found}`, none expected"


@dataclass(unsafe_hash=True)
class PrefixTooLongError(StrongIdError):
    """Prefix is 64 characters or longer."""

    code: ClassVar[str] = codes.PREFIX_TOO_LONG

    length: int

    @property
    def message(self) -> str:
        return (
            "prefix too long. should be less than 64 characters, "
            f"found {self.length}"
        )


@dataclass(unsafe_hash=True)
class PrefixExpectedError(StrongIdError):
    """A prefix was required, but the supplied text was empty."""

    code: ClassVar[str] = codes.PREFIX_EXPECTED

    @property
    def message(self) -> str:
        return "no prefix was given, but one was expected"


@dataclass(unsafe_hash=True)
class IncorrectPrefixCharacterError(StrongIdError):
    """Prefix contains a character other than lowercase ASCII (or ``_``)."""

    code: ClassVar[str] = codes.INCORRECT_PREFIX_CHARACTER

    character: str

    @property
    def message(self) -> str:
        return (
            "prefix may only contain lowercase ascii characters, "
            f"found `{self.character}`"
        )
