"""Fixed-width base32 codec for identifier suffixes.

The canonical string form of a ``W``-byte value is exactly ``encoded_len(W)``
lowercase Crockford Base32 characters, most-significant digit first and
left-padded with ``0``. Fixed width keeps string order identical to the
big-endian numeric order of the encoded bytes.
"""

from __future__ import annotations

from strong_id.errors import InvalidByteError, InvalidFirstByteError, InvalidLengthError

ALPHABET = "0123456789abcdefghjkmnpqrstvwxyz"
_DECODE_TABLE = {char: index for index, char in enumerate(ALPHABET)}
_BITS_PER_CHAR = 5


def encoded_len(width: int) -> int:
    """Return the encoded string length for a ``width``-byte value."""
    return (width * 8 + _BITS_PER_CHAR - 1) // _BITS_PER_CHAR


def encode(data: bytes) -> str:
    """Encode a big-endian byte buffer into its fixed-length base32 string."""
    number = int.from_bytes(data, byteorder="big", signed=False)
    chars: list[str] = []
    for _ in range(encoded_len(len(data))):
        number, remainder = divmod(number, 32)
        chars.append(ALPHABET[remainder])
    return "".join(reversed(chars))


def decode(text: str, width: int) -> bytes:
    """Decode a fixed-length base32 string into exactly ``width`` bytes.

    Lengths are measured in UTF-8 bytes; a non-ASCII character counts as more
    than one.

    The first character carries ``encoded_len(width) * 5 - width * 8`` bits
    that do not map onto output bytes. Any of those bits being set means the
    value cannot fit in ``width`` bytes, which is reported as
    ``InvalidFirstByteError`` rather than silently truncated.
    """
    expected = encoded_len(width)
    found = len(text.encode("utf-8"))
    if found != expected:
        raise InvalidLengthError(expected=expected, found=found)

    overhang = expected * _BITS_PER_CHAR - width * 8
    first = _DECODE_TABLE.get(text[0])
    if first is None:
        raise InvalidByteError(character=text[0])
    if first >> (_BITS_PER_CHAR - overhang):
        raise InvalidFirstByteError()

    number = first
    for char in text[1:]:
        value = _DECODE_TABLE.get(char)
        if value is None:
            raise InvalidByteError(character=char)
        number = (number << _BITS_PER_CHAR) | value

    return number.to_bytes(width, byteorder="big", signed=False)
