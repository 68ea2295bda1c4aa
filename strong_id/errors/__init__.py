"""Public error API for strong identifiers."""

from . import codes
from .exceptions import (
    Base32Error,
    IncorrectPrefixCharacterError,
    InvalidByteError,
    InvalidFirstByteError,
    InvalidLengthError,
    InvalidPrefixError,
    MissingPrefixError,
    NoPrefixExpectedError,
    PrefixExpectedError,
    PrefixTooLongError,
    StrongIdError,
)
from .factories import internal_error, validation_error
from .normalize import exception_to_error
from .types import ErrorCategory, ErrorDetail

__all__ = [
    "Base32Error",
    "ErrorCategory",
    "ErrorDetail",
    "IncorrectPrefixCharacterError",
    "InvalidByteError",
    "InvalidFirstByteError",
    "InvalidLengthError",
    "InvalidPrefixError",
    "MissingPrefixError",
    "NoPrefixExpectedError",
    "PrefixExpectedError",
    "PrefixTooLongError",
    "StrongIdError",
    "codes",
    "exception_to_error",
    "internal_error",
    "validation_error",
]
