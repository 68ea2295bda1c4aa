"""Identifier types with a prefix fixed at class definition.

Declare a type by subclassing ``StrongId`` with the suffix type and an
optional prefix::

    class UserId(StrongId, suffix=U16, prefix="user"):
        pass

    UserId(3203)                  # construct from the raw backing value
    str(UserId(3203))             # "user_0343"
    UserId.parse("user_0343").id  # U16(3203)

``StrongUuid`` does the same for ``Uuid`` suffixes and adds generation
helpers (``UserId.now_v7()``). The prefix literal is validated when the class
is created, so a bad declaration fails at import time rather than at parse
time.
"""

from __future__ import annotations

import types
import uuid
from functools import total_ordering
from typing import Any, ClassVar, Self

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from strong_id.errors import (
    InvalidPrefixError,
    MissingPrefixError,
    NoPrefixExpectedError,
    StrongIdError,
)
from strong_id.identifier import (
    format_identifier,
    log_rejected_parse,
    split_identifier,
)
from strong_id.prefix import validate_prefix
from strong_id.serialization import identifier_core_schema
from strong_id.values import Id, Uuid, coerce_suffix

_UNSET: Any = object()


@total_ordering
class StrongId:
    """Base class for identifier types with a class-level prefix."""

    __slots__ = ("_suffix",)

    suffix_type: ClassVar[type[Id] | None] = None
    PREFIX: ClassVar[str | None] = None

    _suffix: Any

    def __init_subclass__(
        cls,
        *,
        suffix: type[Id] | None = None,
        prefix: str | None = _UNSET,
        **kwargs: Any,
    ) -> None:
        super().__init_subclass__(**kwargs)
        if suffix is not None:
            cls.suffix_type = suffix
        if cls.suffix_type is None:
            raise TypeError(
                f"{cls.__name__} must declare a suffix type, "
                f"e.g. class {cls.__name__}(StrongId, suffix=U16)"
            )
        if prefix is not _UNSET:
            # An empty literal declares an identifier without prefix.
            cls.PREFIX = str(validate_prefix(prefix)) if prefix else None

    def __init__(self, value: object) -> None:
        object.__setattr__(self, "_suffix", coerce_suffix(self._suffix_type(), value))

    @classmethod
    def parse(cls, text: str) -> Self:
        """Parse the canonical string, requiring exactly the declared prefix."""
        suffix_type = cls._suffix_type()
        try:
            split = split_identifier(text)
            if cls.PREFIX is None:
                if split is not None:
                    raise NoPrefixExpectedError(found=split[0])
                return cls(suffix_type.decode(text))

            if split is None or not split[0]:
                raise MissingPrefixError(expected=cls.PREFIX)
            found, suffix = split
            if found != cls.PREFIX:
                raise InvalidPrefixError(expected=cls.PREFIX, found=found)
            return cls(suffix_type.decode(suffix))
        except StrongIdError as exc:
            log_rejected_parse(cls, text, exc)
            raise

    @property
    def prefix(self) -> str | None:
        return self.PREFIX

    @property
    def id(self) -> Any:
        return self._suffix

    def __int__(self) -> int:
        return int(self._suffix)

    def __str__(self) -> str:
        return format_identifier(self.PREFIX, self._suffix)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._suffix!r})"

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._suffix == other._suffix

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._suffix < other._suffix

    def __hash__(self) -> int:
        return hash((type(self), self._suffix))

    def __reduce__(self) -> tuple[Any, ...]:
        return (type(self), (self._suffix,))

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return identifier_core_schema(cls)

    @classmethod
    def _suffix_type(cls) -> type[Id]:
        if cls.suffix_type is None:
            raise TypeError(f"{cls.__name__} has no suffix type; declare a subclass")
        return cls.suffix_type


class StrongUuid(StrongId):
    """Base class for ``Uuid``-backed identifier types."""

    __slots__ = ()

    suffix_type = Uuid

    def __init_subclass__(cls, **kwargs: Any) -> None:
        kwargs.setdefault("suffix", Uuid)
        if not issubclass(kwargs["suffix"], Uuid):
            raise TypeError(f"{cls.__name__} must be backed by Uuid")
        super().__init_subclass__(**kwargs)

    @classmethod
    def from_u128(cls, value: int) -> Self:
        return cls(Uuid.from_u128(value))

    @classmethod
    def now_v1(cls, node_id: bytes | None = None) -> Self:
        return cls(Uuid.now_v1(node_id))

    @classmethod
    def new_v3(cls, namespace: uuid.UUID, name: str | bytes) -> Self:
        return cls(Uuid.new_v3(namespace, name))

    @classmethod
    def new_v4(cls) -> Self:
        return cls(Uuid.new_v4())

    @classmethod
    def new_v5(cls, namespace: uuid.UUID, name: str | bytes) -> Self:
        return cls(Uuid.new_v5(namespace, name))

    @classmethod
    def new_v7(cls, timestamp_ms: int) -> Self:
        return cls(Uuid.new_v7(timestamp_ms))

    @classmethod
    def now_v7(cls) -> Self:
        return cls(Uuid.now_v7())

    @classmethod
    def new_v8(cls, buf: bytes) -> Self:
        return cls(Uuid.new_v8(buf))


def strong_id(
    name: str,
    suffix: type[Id],
    prefix: str | None = None,
    *,
    module: str | None = None,
) -> type[StrongId]:
    """Create a ``StrongId`` subclass without a class statement."""
    created = types.new_class(
        name, (StrongId,), {"suffix": suffix, "prefix": prefix or ""}
    )
    if module is not None:
        created.__module__ = module
    return created


def strong_uuid(
    name: str,
    prefix: str | None = None,
    *,
    module: str | None = None,
) -> type[StrongUuid]:
    """Create a ``StrongUuid`` subclass without a class statement."""
    created = types.new_class(name, (StrongUuid,), {"prefix": prefix or ""})
    if module is not None:
        created.__module__ = module
    return created
