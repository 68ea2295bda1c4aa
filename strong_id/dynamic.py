"""Identifiers whose prefix is chosen at runtime.

``DynamicStrongId[T]`` is the identifier type for suffix type ``T``: it carries
an optional validated prefix and a ``T`` value, formats as ``prefix_suffix``
(or ``suffix``), and parses any prefix that passes validation::

    user_id = DynamicStrongId[U16].new("user", 3203)
    str(user_id)  # "user_0343"
    DynamicStrongId[U16].parse("user_0343") == user_id  # True
"""

from __future__ import annotations

from functools import lru_cache, total_ordering
from typing import Any, ClassVar, Generic, Self, TypeVar

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from strong_id.errors import MissingPrefixError, StrongIdError
from strong_id.identifier import (
    format_identifier,
    log_rejected_parse,
    split_identifier,
)
from strong_id.prefix import Prefix, validate_prefix
from strong_id.serialization import identifier_core_schema
from strong_id.values import Id, Uuid, coerce_suffix

_T = TypeVar("_T", bound=Id)


@total_ordering
class DynamicStrongId(Generic[_T]):
    """Identifier with an optional runtime prefix and a ``T`` suffix.

    Equality, hashing and ordering are structural over ``(prefix, suffix)``;
    identifiers without a prefix sort before identifiers with one.
    """

    __slots__ = ("_prefix", "_suffix")

    suffix_type: ClassVar[type[Id] | None] = None

    _prefix: Prefix | None
    _suffix: _T

    def __class_getitem__(cls, suffix_type: type[Id]) -> type[DynamicStrongId[Any]]:
        if cls.suffix_type is not None:
            raise TypeError(f"{cls.__name__} is already parametrized")
        return _specialize(cls, suffix_type)

    def __init__(self, suffix: object, prefix: str | None = None) -> None:
        suffix_type = type(self)._require_suffix_type()
        object.__setattr__(
            self, "_prefix", None if prefix is None else validate_prefix(prefix)
        )
        object.__setattr__(self, "_suffix", coerce_suffix(suffix_type, suffix))

    @classmethod
    def new(cls, prefix: str, value: object) -> Self:
        """Create an identifier with a required prefix.

        An empty prefix raises ``PrefixExpectedError``; use
        ``from_optional_prefix`` when an empty prefix means "no prefix".
        """
        return cls._for_value(value)(value, validate_prefix(prefix))

    @classmethod
    def new_plain(cls, value: object) -> Self:
        """Create an identifier without a prefix."""
        return cls._for_value(value)(value)

    @classmethod
    def from_optional_prefix(cls, prefix: str | None, value: object) -> Self:
        """Create an identifier, treating ``None`` or ``""`` as no prefix."""
        if not prefix:
            return cls.new_plain(value)
        return cls.new(prefix, value)

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse ``prefix_suffix`` or bare ``suffix``, splitting on the last ``_``."""
        suffix_type = cls._require_suffix_type()
        try:
            split = split_identifier(text)
            if split is None:
                return cls(suffix_type.decode(text))

            prefix, suffix = split
            if not prefix.strip():
                raise MissingPrefixError(expected=prefix)
            validated = validate_prefix(prefix)
            return cls(suffix_type.decode(suffix), validated)
        except StrongIdError as exc:
            log_rejected_parse(cls, text, exc)
            raise

    @property
    def prefix(self) -> Prefix | None:
        return self._prefix

    @property
    def suffix(self) -> _T:
        return self._suffix

    @property
    def id(self) -> _T:
        return self._suffix

    def __str__(self) -> str:
        return format_identifier(self._prefix, self._suffix)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(prefix={self._prefix!r}, suffix={self._suffix!r})"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash((type(self), self._prefix, self._suffix))

    def __reduce__(self) -> tuple[Any, ...]:
        return (_rebuild, (type(self).__bases__[0], self.suffix_type, self._suffix, self._prefix))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return identifier_core_schema(cls)

    def _key(self) -> tuple[bool, str, Any]:
        return (self._prefix is not None, self._prefix or "", self._suffix)

    @classmethod
    def _require_suffix_type(cls) -> type[Id]:
        if cls.suffix_type is None:
            raise TypeError(
                f"{cls.__name__} must be parametrized with a suffix type, "
                f"e.g. {cls.__name__}[U16]"
            )
        return cls.suffix_type

    @classmethod
    def _for_value(cls, value: object) -> type[Self]:
        """Return the concrete class for ``value``, inferring it when unparametrized."""
        if cls.suffix_type is not None:
            return cls
        value_type = type(value)
        if not _is_id_type(value_type):
            raise TypeError(
                f"cannot infer suffix type from {value_type.__name__}; "
                f"use {cls.__name__}[<suffix type>]"
            )
        return cls[value_type]


class DynamicUuidConstructors:
    """Generation helpers mixed into ``DynamicStrongId[Uuid]``.

    Each helper takes an optional prefix: ``None`` produces a plain
    identifier, any string is validated as a required prefix.
    """

    __slots__ = ()

    @classmethod
    def from_u128(cls, value: int, prefix: str | None = None) -> Any:
        return cls._with_prefix(Uuid.from_u128(value), prefix)

    @classmethod
    def now_v1(cls, prefix: str | None = None, node_id: bytes | None = None) -> Any:
        return cls._with_prefix(Uuid.now_v1(node_id), prefix)

    @classmethod
    def new_v3(cls, namespace: Any, name: str | bytes, prefix: str | None = None) -> Any:
        return cls._with_prefix(Uuid.new_v3(namespace, name), prefix)

    @classmethod
    def new_v4(cls, prefix: str | None = None) -> Any:
        return cls._with_prefix(Uuid.new_v4(), prefix)

    @classmethod
    def new_v5(cls, namespace: Any, name: str | bytes, prefix: str | None = None) -> Any:
        return cls._with_prefix(Uuid.new_v5(namespace, name), prefix)

    @classmethod
    def new_v7(cls, timestamp_ms: int, prefix: str | None = None) -> Any:
        return cls._with_prefix(Uuid.new_v7(timestamp_ms), prefix)

    @classmethod
    def now_v7(cls, prefix: str | None = None) -> Any:
        return cls._with_prefix(Uuid.now_v7(), prefix)

    @classmethod
    def new_v8(cls, buf: bytes, prefix: str | None = None) -> Any:
        return cls._with_prefix(Uuid.new_v8(buf), prefix)

    @classmethod
    def _with_prefix(cls, value: Uuid, prefix: str | None) -> Any:
        if prefix is None:
            return cls.new_plain(value)
        return cls.new(prefix, value)


@lru_cache(maxsize=None)
def _specialize(base: type[DynamicStrongId[Any]], suffix_type: type[Id]) -> type[DynamicStrongId[Any]]:
    """Create (once) the concrete subclass of ``base`` for ``suffix_type``."""
    if not _is_id_type(suffix_type):
        raise TypeError(f"{suffix_type!r} is not an identifier suffix type")

    bases: tuple[type, ...] = (base,)
    if issubclass(suffix_type, Uuid):
        bases = (base, DynamicUuidConstructors)

    name = f"{base.__name__}[{suffix_type.__name__}]"
    namespace = {
        "__slots__": (),
        "__module__": base.__module__,
        "__qualname__": name,
        "suffix_type": suffix_type,
    }
    return type(name, bases, namespace)


def _rebuild(
    base: type[DynamicStrongId[Any]], suffix_type: type[Id], suffix: Id, prefix: Prefix | None
) -> DynamicStrongId[Any]:
    return base[suffix_type](suffix, prefix)


def _is_id_type(value: object) -> bool:
    return (
        isinstance(value, type)
        and isinstance(getattr(value, "WIDTH", None), int)
        and callable(getattr(value, "encode", None))
        and callable(getattr(value, "decode", None))
    )
