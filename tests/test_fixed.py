"""Tests for identifier types declared with a fixed prefix."""

from __future__ import annotations

import pickle
import uuid

import pytest

from strong_id import StrongId, StrongUuid, U16, U32, Uuid, strong_id, strong_uuid
from strong_id.errors import (
    IncorrectPrefixCharacterError,
    InvalidFirstByteError,
    InvalidLengthError,
    InvalidPrefixError,
    MissingPrefixError,
    NoPrefixExpectedError,
    StrongIdError,
)


class PrefixU32(StrongId, suffix=U32, prefix="prefix"):
    """32-bit identifier with the literal prefix ``prefix``."""


class NoPrefixU16(StrongId, suffix=U16):
    """16-bit identifier without a prefix."""


class UserId(StrongUuid, prefix="user"):
    """UUID-backed user identifier."""


@pytest.mark.parametrize(
    ("text", "value"),
    [("prefix_0000000", 0), ("prefix_3zzzzzz", U32.MAX), ("prefix_000009d", 301)],
)
def test_u32_prefix_valid(text: str, value: int) -> None:
    """Declared prefixes format and parse round-trip."""
    identifier = PrefixU32(value)
    assert identifier.prefix == "prefix"
    assert str(identifier) == text
    assert identifier.id == value

    parsed = PrefixU32.parse(text)
    assert parsed == identifier
    assert int(parsed) == value


@pytest.mark.parametrize(
    ("text", "error"),
    [
        ("0000000", MissingPrefixError(expected="prefix")),
        ("000009d", MissingPrefixError(expected="prefix")),
        ("3zzzzzz", MissingPrefixError(expected="prefix")),
        ("_000009d", MissingPrefixError(expected="prefix")),
        ("prefix_0000000000", InvalidLengthError(expected=7, found=10)),
        ("prefix_zzzzzzz", InvalidFirstByteError()),
        ("prefix_z000000", InvalidFirstByteError()),
        ("prefix_09d", InvalidLengthError(expected=7, found=3)),
        ("zzzzzzz", MissingPrefixError(expected="prefix")),
        ("dyn_3000000", InvalidPrefixError(expected="prefix", found="dyn")),
    ],
)
def test_u32_prefix_invalid(text: str, error: StrongIdError) -> None:
    """A fixed-prefix type accepts exactly its own prefix."""
    with pytest.raises(StrongIdError) as excinfo:
        PrefixU32.parse(text)
    assert excinfo.value == error


@pytest.mark.parametrize(
    ("text", "value"),
    [("0000", 0), ("1zzz", U16.MAX), ("009d", 301)],
)
def test_u16_no_prefix_valid(text: str, value: int) -> None:
    """Types without a prefix format as the bare suffix."""
    identifier = NoPrefixU16(value)
    assert identifier.prefix is None
    assert str(identifier) == text
    assert NoPrefixU16.parse(text).id == value


@pytest.mark.parametrize(
    ("text", "error"),
    [
        ("00000", InvalidLengthError(expected=4, found=5)),
        ("prefix_00000", NoPrefixExpectedError(found="prefix")),
        ("zzzz", InvalidFirstByteError()),
        ("z000", InvalidFirstByteError()),
        ("09d", InvalidLengthError(expected=4, found=3)),
    ],
)
def test_u16_no_prefix_invalid(text: str, error: StrongIdError) -> None:
    """Any delimiter in the input is an unexpected prefix."""
    with pytest.raises(StrongIdError) as excinfo:
        NoPrefixU16.parse(text)
    assert excinfo.value == error


def test_invalid_prefix_literal_fails_at_class_creation() -> None:
    """Bad prefix declarations are rejected when the class is defined."""
    with pytest.raises(IncorrectPrefixCharacterError):

        class BadId(StrongId, suffix=U16, prefix="Bad"):
            pass


def test_suffix_type_is_required() -> None:
    """A declaration without a suffix type is a programming error."""
    with pytest.raises(TypeError):

        class Untyped(StrongId, prefix="untyped"):
            pass


def test_strong_uuid_rejects_integer_suffix() -> None:
    """``StrongUuid`` subclasses are always UUID-backed."""
    with pytest.raises(TypeError):

        class NotUuid(StrongUuid, suffix=U16):
            pass


def test_construction_coerces_raw_values() -> None:
    """Raw integers are width-checked and wrapped in the suffix type."""
    assert isinstance(PrefixU32(301).id, U32)
    with pytest.raises(OverflowError):
        NoPrefixU16(70000)
    with pytest.raises(TypeError):
        NoPrefixU16("0001")


def test_equality_is_per_type() -> None:
    """Equal suffixes in different identifier types are not equal."""
    other = strong_id("OtherU32", U32, "prefix")
    assert PrefixU32(1) == PrefixU32(1)
    assert PrefixU32(1) != other(1)
    assert PrefixU32(1) < PrefixU32(2)
    assert len({PrefixU32(1), PrefixU32(1), PrefixU32(2)}) == 2


def test_repr_and_immutability() -> None:
    """Repr names the declared type; attributes cannot be reassigned."""
    identifier = PrefixU32(301)
    assert repr(identifier) == "PrefixU32(U32(301))"
    with pytest.raises(AttributeError):
        identifier._suffix = U32(1)  # type: ignore[misc]


def test_fixed_identifiers_pickle() -> None:
    """Module-level declared types round-trip through pickle."""
    identifier = UserId(uuid.NAMESPACE_DNS)
    assert pickle.loads(pickle.dumps(identifier)) == identifier


def test_strong_uuid_generation_helpers() -> None:
    """Generated identifiers carry the declared prefix and a UUID suffix."""
    identifier = UserId.now_v7()
    assert str(identifier).startswith("user_")
    assert isinstance(identifier.id, Uuid)
    assert (identifier.id.int >> 76) & 0xF == 7
    assert UserId.new_v4().prefix == "user"
    assert UserId.from_u128(0).id.int == 0
    assert UserId.parse(str(identifier)) == identifier


def test_factory_functions_build_types() -> None:
    """``strong_id`` and ``strong_uuid`` create equivalent declared types."""
    order_id = strong_id("OrderId", U16, "order")
    assert str(order_id(301)) == "order_009d"

    plain_uuid = strong_uuid("PlainUuid")
    value = plain_uuid(uuid.UUID(int=0))
    assert value.prefix is None
    assert str(value) == "0" * 26

    assert strong_id("EmptyPrefix", U16, "").PREFIX is None
