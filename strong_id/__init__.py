"""Strongly typed, base32 encoded identifiers compatible with TypeID.

An identifier is a fixed-width value (``U8`` .. ``U128``, ``Usize`` or
``Uuid``) rendered as fixed-length lowercase base32, optionally preceded by a
validated prefix and ``_``::

    from strong_id import DynamicStrongId, StrongUuid, U16

    DynamicStrongId[U16].new("user", 3203)        # user_0343

    class UserId(StrongUuid, prefix="user"):
        pass

    UserId.now_v7()                               # user_01h536z8abez196j2nzz06y8c8
"""

from strong_id.dynamic import DynamicStrongId
from strong_id.errors import (
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
from strong_id.fixed import StrongId, StrongUuid, strong_id, strong_uuid
from strong_id.identifier import StrongIdLike
from strong_id.prefix import Prefix, validate_prefix
from strong_id.values import (
    U8,
    U16,
    U32,
    U64,
    U128,
    Id,
    Usize,
    Uuid,
    encoded_len,
)

__all__ = [
    "Base32Error",
    "DynamicStrongId",
    "Id",
    "IncorrectPrefixCharacterError",
    "InvalidByteError",
    "InvalidFirstByteError",
    "InvalidLengthError",
    "InvalidPrefixError",
    "MissingPrefixError",
    "NoPrefixExpectedError",
    "Prefix",
    "PrefixExpectedError",
    "PrefixTooLongError",
    "StrongId",
    "StrongIdError",
    "StrongIdLike",
    "StrongUuid",
    "U128",
    "U16",
    "U32",
    "U64",
    "U8",
    "Usize",
    "Uuid",
    "encoded_len",
    "strong_id",
    "strong_uuid",
    "validate_prefix",
]
