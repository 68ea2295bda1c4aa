"""Fixed-width values usable as identifier suffixes.

Every suffix type has a ``WIDTH`` in bytes and a canonical big-endian byte
form. ``encode`` renders that form through the base32 codec and ``decode``
parses exactly ``encoded_len(WIDTH)`` characters back into the type.
"""

from __future__ import annotations

import hashlib
import operator
import secrets
import struct
import time
import uuid
from typing import Any, ClassVar, Protocol, Self, SupportsIndex

from strong_id import base32

_UUID_VERSION_MASK = 0xF << 76
_UUID_VARIANT_MASK = 0x3 << 62
_UUID_VARIANT_RFC4122 = 0x2 << 62


class Id(Protocol):
    """Capability shared by every value that can back an identifier."""

    WIDTH: ClassVar[int]

    def encode(self) -> str:
        """Encode the value into its fixed-length base32 string."""

    @classmethod
    def decode(cls, text: str) -> Self:
        """Decode the value from its fixed-length base32 string."""


class UnsignedInt(int):
    """Unsigned integer restricted to ``WIDTH`` bytes.

    Subclasses declare their width as a class keyword::

        class U16(UnsignedInt, width=2): ...

    Arithmetic on instances returns plain ``int``; only construction and the
    codec round-trip are width-checked.
    """

    WIDTH: ClassVar[int]
    MIN: ClassVar[int] = 0
    MAX: ClassVar[int]

    def __init_subclass__(cls, *, width: int | None = None, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if width is not None:
            cls.WIDTH = width
            cls.MAX = (1 << (width * 8)) - 1

    def __new__(cls, value: SupportsIndex = 0) -> Self:
        number = operator.index(value)
        if not cls.MIN <= number <= cls.MAX:
            raise OverflowError(
                f"{number} is out of range for {cls.__name__} "
                f"({cls.MIN}..{cls.MAX})"
            )
        return super().__new__(cls, number)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int.__repr__(self)})"

    def __str__(self) -> str:
        return int.__repr__(self)

    def encode(self) -> str:
        return base32.encode(self.to_bytes(self.WIDTH, byteorder="big", signed=False))

    @classmethod
    def decode(cls, text: str) -> Self:
        raw = base32.decode(text, cls.WIDTH)
        return cls(int.from_bytes(raw, byteorder="big", signed=False))


class U8(UnsignedInt, width=1):
    """8-bit unsigned suffix (2 characters)."""


class U16(UnsignedInt, width=2):
    """16-bit unsigned suffix (4 characters)."""


class U32(UnsignedInt, width=4):
    """32-bit unsigned suffix (7 characters)."""


class U64(UnsignedInt, width=8):
    """64-bit unsigned suffix (13 characters)."""


class U128(UnsignedInt, width=16):
    """128-bit unsigned suffix (26 characters)."""


class Usize(UnsignedInt, width=struct.calcsize("P")):
    """Platform pointer-width unsigned suffix (13 characters on 64-bit hosts)."""


class Uuid(uuid.UUID):
    """UUID suffix encoded as 26 base32 characters, as in TypeID.

    Generation helpers return ``Uuid`` instances; any ``uuid.UUID`` can be
    converted with ``Uuid.from_uuid``.
    """

    __slots__ = ()

    WIDTH: ClassVar[int] = 16

    def encode(self) -> str:
        return base32.encode(self.bytes)

    @classmethod
    def decode(cls, text: str) -> Self:
        return cls(bytes=base32.decode(text, cls.WIDTH))

    @classmethod
    def from_uuid(cls, value: uuid.UUID) -> Self:
        """Wrap a standard-library UUID."""
        if isinstance(value, cls):
            return value
        return cls(int=value.int)

    @classmethod
    def from_u128(cls, value: int) -> Self:
        return cls(int=value)

    @classmethod
    def now_v1(cls, node_id: bytes | None = None) -> Self:
        """Generate a time-based v1 UUID, optionally for a 6-byte node id."""
        node = int.from_bytes(node_id, byteorder="big") if node_id is not None else None
        return cls.from_uuid(uuid.uuid1(node=node))

    @classmethod
    def new_v3(cls, namespace: uuid.UUID, name: str | bytes) -> Self:
        """Generate a name-based (MD5) v3 UUID."""
        digest = hashlib.md5(namespace.bytes + _name_bytes(name)).digest()
        return cls(bytes=digest[:16], version=3)

    @classmethod
    def new_v4(cls) -> Self:
        return cls.from_uuid(uuid.uuid4())

    @classmethod
    def new_v5(cls, namespace: uuid.UUID, name: str | bytes) -> Self:
        """Generate a name-based (SHA-1) v5 UUID."""
        digest = hashlib.sha1(namespace.bytes + _name_bytes(name)).digest()
        return cls(bytes=digest[:16], version=5)

    @classmethod
    def new_v7(cls, timestamp_ms: int) -> Self:
        """Generate a v7 UUID for a Unix timestamp in milliseconds.

        The timestamp occupies the high 48 bits; the remaining bits outside
        the version and variant fields are cryptographically random.
        """
        if timestamp_ms < 0 or timestamp_ms >= (1 << 48):
            raise ValueError("timestamp_ms out of UUIDv7 48-bit range")
        entropy = int.from_bytes(secrets.token_bytes(10), byteorder="big")
        return cls(int=_stamp_version((timestamp_ms << 80) | entropy, 7))

    @classmethod
    def now_v7(cls) -> Self:
        return cls.new_v7(time.time_ns() // 1_000_000)

    @classmethod
    def new_v8(cls, buf: bytes) -> Self:
        """Build a custom v8 UUID from 16 caller-supplied bytes."""
        if len(buf) != 16:
            raise ValueError("UUIDv8 buffer must be exactly 16 bytes")
        return cls(int=_stamp_version(int.from_bytes(buf, byteorder="big"), 8))


SUFFIX_TYPES: dict[str, type[Id]] = {
    "u8": U8,
    "u16": U16,
    "u32": U32,
    "u64": U64,
    "u128": U128,
    "usize": Usize,
    "uuid": Uuid,
}


def encoded_len(suffix_type: type[Id]) -> int:
    """Return the fixed encoded length of ``suffix_type``."""
    return base32.encoded_len(suffix_type.WIDTH)


def coerce_suffix(suffix_type: type[Id], value: object) -> Id:
    """Convert a raw backing value into ``suffix_type``.

    Instances of the type pass through. Integer types accept exact integers
    (not floats, strings or booleans); ``Uuid`` accepts ``uuid.UUID`` instances
    and UUID strings.
    """
    if isinstance(value, suffix_type):
        return value
    if issubclass(suffix_type, Uuid):
        if isinstance(value, uuid.UUID):
            return suffix_type.from_uuid(value)
        if isinstance(value, str):
            return suffix_type(value)
        raise TypeError(f"cannot convert {type(value).__name__} to {suffix_type.__name__}")
    if issubclass(suffix_type, UnsignedInt):
        if isinstance(value, bool) or not isinstance(value, SupportsIndex):
            raise TypeError(
                f"cannot convert {type(value).__name__} to {suffix_type.__name__}"
            )
        return suffix_type(value)
    raise TypeError(f"unsupported suffix type {suffix_type.__name__}")


def _stamp_version(number: int, version: int) -> int:
    """Set RFC 4122 variant bits and the version nibble on a 128-bit value."""
    number = (number & ~_UUID_VERSION_MASK) | (version << 76)
    return (number & ~_UUID_VARIANT_MASK) | _UUID_VARIANT_RFC4122


def _name_bytes(name: str | bytes) -> bytes:
    return name.encode("utf-8") if isinstance(name, str) else bytes(name)
