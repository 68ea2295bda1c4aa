"""Tests for runtime-prefixed identifiers."""

from __future__ import annotations

import logging
import pickle
import uuid

import pytest

from strong_id import DynamicStrongId, U8, U16, U32, Usize, Uuid
from strong_id.errors import (
    IncorrectPrefixCharacterError,
    InvalidByteError,
    InvalidFirstByteError,
    InvalidLengthError,
    MissingPrefixError,
    PrefixExpectedError,
    StrongIdError,
)

USIZE_MAX_TEXT = "fzzzzzzzzzzzz" if Usize.WIDTH == 8 else "3zzzzzz"
USIZE_ZERO_TEXT = "0" * len(USIZE_MAX_TEXT)


@pytest.mark.parametrize(
    ("suffix_type", "prefix", "text", "value"),
    [
        (U32, "dyn", "dyn_0000000", 0),
        (U32, "dyn", "dyn_3zzzzzz", U32.MAX),
        (U32, "dyn", "dyn_000009d", 301),
        (U32, None, "000009d", 301),
        (U32, None, "3zzzzzz", U32.MAX),
        (U32, None, "0000000", 0),
        (U16, "dyn", "dyn_0000", 0),
        (U16, "dyn", "dyn_1zzz", U16.MAX),
        (U16, "dyn", "dyn_009d", 301),
        (U16, None, "009d", 301),
        (U16, None, "1zzz", U16.MAX),
        (Usize, "dyn", f"dyn_{USIZE_MAX_TEXT}", Usize.MAX),
        (Usize, None, USIZE_ZERO_TEXT, 0),
    ],
)
def test_format_and_parse_valid_identifiers(
    suffix_type: type, prefix: str | None, text: str, value: int
) -> None:
    """Identifiers format to their canonical text and parse back identically."""
    id_type = DynamicStrongId[suffix_type]
    identifier = id_type.new(prefix, value) if prefix else id_type.new_plain(value)

    assert str(identifier) == text
    assert identifier.id == value

    parsed = id_type.parse(text)
    assert parsed == identifier
    assert parsed.prefix == prefix
    assert parsed.suffix == value
    assert isinstance(parsed.id, suffix_type)


@pytest.mark.parametrize(
    ("text", "error"),
    [
        ("dyn_000", InvalidLengthError(expected=2, found=3)),
        ("dyn_8f", InvalidFirstByteError()),
        ("dyn_zz", InvalidFirstByteError()),
        ("09d", InvalidLengthError(expected=2, found=3)),
        ("8f", InvalidFirstByteError()),
        ("000", InvalidLengthError(expected=2, found=3)),
        ("0l", InvalidByteError(character="l")),
        ("Case_00", IncorrectPrefixCharacterError(character="C")),
        ("00numeric_00", IncorrectPrefixCharacterError(character="0")),
        ("case0_00", IncorrectPrefixCharacterError(character="0")),
    ],
)
def test_invalid_u8_identifiers(text: str, error: StrongIdError) -> None:
    """Malformed text is rejected with the precise typed error."""
    with pytest.raises(StrongIdError) as excinfo:
        DynamicStrongId[U8].parse(text)
    assert excinfo.value == error


def test_invalid_usize_length() -> None:
    """Pointer-width suffixes report their own expected length."""
    expected = len(USIZE_MAX_TEXT)
    with pytest.raises(InvalidLengthError) as excinfo:
        DynamicStrongId[Usize].parse("dyn_0000000000")
    assert excinfo.value == InvalidLengthError(expected=expected, found=10)


def test_parse_splits_on_last_underscore() -> None:
    """Prefixes may contain underscores; the suffix follows the last one."""
    parsed = DynamicStrongId[U16].parse("multi_part_0000")
    assert parsed.prefix == "multi_part"
    assert parsed.id == 0


def test_parse_with_empty_or_blank_prefix_is_missing_prefix() -> None:
    """A delimiter with nothing meaningful before it is a missing prefix."""
    with pytest.raises(MissingPrefixError) as excinfo:
        DynamicStrongId[U16].parse("_0000")
    assert excinfo.value == MissingPrefixError(expected="")

    with pytest.raises(MissingPrefixError):
        DynamicStrongId[U16].parse("  _0000")


def test_parse_length_mismatch_for_u16() -> None:
    """A ten-character suffix is rejected for a four-character type."""
    with pytest.raises(InvalidLengthError) as excinfo:
        DynamicStrongId[U16].parse("0000000000")
    assert excinfo.value == InvalidLengthError(expected=4, found=10)


def test_new_requires_non_empty_prefix() -> None:
    """``new`` validates its prefix; ``from_optional_prefix`` treats empty as none."""
    with pytest.raises(PrefixExpectedError):
        DynamicStrongId[U16].new("", 1)

    plain = DynamicStrongId[U16].from_optional_prefix("", 1)
    assert plain.prefix is None
    assert str(plain) == "0001"
    assert str(DynamicStrongId[U16].from_optional_prefix("user", 1)) == "user_0001"


def test_new_infers_suffix_type_from_value() -> None:
    """The unparametrized type picks the specialization from the value's type."""
    identifier = DynamicStrongId.new("user", U16(3203))
    assert type(identifier) is DynamicStrongId[U16]
    assert str(identifier) == "user_0343"

    with pytest.raises(TypeError):
        DynamicStrongId.new("user", 3203)


def test_specializations_are_cached() -> None:
    """Parametrizing twice yields the same class object."""
    assert DynamicStrongId[U16] is DynamicStrongId[U16]
    assert DynamicStrongId[U16] is not DynamicStrongId[U32]
    assert DynamicStrongId[U16].__name__ == "DynamicStrongId[U16]"


def test_unparametrized_parse_is_rejected() -> None:
    """Parsing needs a suffix type to know the expected length."""
    with pytest.raises(TypeError):
        DynamicStrongId.parse("0000")


def test_equality_and_ordering() -> None:
    """Identifiers compare structurally; plain ones sort before prefixed ones."""
    id_type = DynamicStrongId[U16]
    plain = id_type.new_plain(5)
    apple = id_type.new("apple", 9)
    apple_low = id_type.new("apple", 1)
    banana = id_type.new("banana", 0)

    assert id_type.new("apple", 9) == apple
    assert hash(id_type.new("apple", 9)) == hash(apple)
    assert sorted([banana, apple, plain, apple_low]) == [plain, apple_low, apple, banana]
    assert DynamicStrongId[U16].new_plain(1) != DynamicStrongId[U32].new_plain(1)


def test_canonical_strings_sort_like_suffixes() -> None:
    """For one prefix, string order of identifiers matches numeric order."""
    id_type = DynamicStrongId[U32]
    values = [0, 1, 31, 32, 301, 65536, U32.MAX]
    texts = [str(id_type.new("user", value)) for value in values]
    assert texts == sorted(texts)


def test_identifiers_are_immutable() -> None:
    """Attributes cannot be reassigned after construction."""
    identifier = DynamicStrongId[U16].new("user", 1)
    with pytest.raises(AttributeError):
        identifier._prefix = None  # type: ignore[misc]


def test_identifiers_pickle() -> None:
    """Pickling restores an equal identifier of the same specialization."""
    identifier = DynamicStrongId[U16].new("user", 3203)
    restored = pickle.loads(pickle.dumps(identifier))
    assert restored == identifier
    assert type(restored) is DynamicStrongId[U16]


def test_repr_shows_prefix_and_suffix() -> None:
    """Repr exposes both parts for debugging."""
    identifier = DynamicStrongId[U16].new("user", 301)
    assert repr(identifier) == "DynamicStrongId[U16](prefix=Prefix('user'), suffix=U16(301))"


def test_uuid_constructors_with_and_without_prefix() -> None:
    """UUID helpers treat ``None`` as plain and any string as a required prefix."""
    id_type = DynamicStrongId[Uuid]

    prefixed = id_type.now_v7("user")
    assert prefixed.prefix == "user"
    assert len(str(prefixed)) == len("user_") + 26

    plain = id_type.new_v4()
    assert plain.prefix is None
    assert len(str(plain)) == 26

    named = id_type.new_v5(uuid.NAMESPACE_DNS, "example.com", prefix="site")
    assert named.id == uuid.uuid5(uuid.NAMESPACE_DNS, "example.com")

    assert id_type.from_u128(0, prefix="zero").id.int == 0

    with pytest.raises(PrefixExpectedError):
        id_type.new_v4("")


def test_integer_specializations_lack_uuid_constructors() -> None:
    """Generation helpers only exist on the ``Uuid`` specialization."""
    assert not hasattr(DynamicStrongId[U16], "now_v7")


def test_rejected_parse_logs_debug_record(caplog: pytest.LogCaptureFixture) -> None:
    """A rejected parse emits one DEBUG record with the error code."""
    caplog.set_level(logging.DEBUG, logger="strong_id.identifier")
    with pytest.raises(InvalidLengthError):
        DynamicStrongId[U16].parse("user_000")

    records = [record for record in caplog.records if record.name == "strong_id.identifier"]
    assert len(records) == 1
    assert "invalid length" in records[0].getMessage()


def test_parse_does_not_depend_on_environment_settings(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """A malformed ``STRONG_ID_*`` variable cannot break identifier parsing."""
    monkeypatch.setenv("STRONG_ID_LOGGING__LEVEL", "verbose")

    parsed = DynamicStrongId[U16].parse("user_0343")

    assert parsed.prefix == "user"
    assert parsed.id == U16(3203)


def test_new_rejects_non_integral_values() -> None:
    """Floats are refused rather than truncated into a different identifier."""
    with pytest.raises(TypeError):
        DynamicStrongId[U16].new("user", 3.9)
    with pytest.raises(TypeError):
        U16(3.9)
