"""SQLAlchemy helpers for identifier-typed columns.

Identifiers are stored as their canonical string. Because every suffix type
has a fixed encoded length, the column width is known up front and the
string sort order in the database matches the identifier order.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import CheckConstraint, Column, String
from sqlalchemy.engine import Dialect
from sqlalchemy.types import TypeDecorator

from strong_id.prefix import MAX_PREFIX_LENGTH
from strong_id.values import encoded_len


class StrongIdType(TypeDecorator[Any]):
    """Column type persisting one identifier type as its canonical string."""

    impl = String
    cache_ok = True

    def __init__(self, id_type: Any) -> None:
        suffix_type = getattr(id_type, "suffix_type", None)
        if suffix_type is None:
            raise TypeError(f"{id_type!r} is not a concrete identifier type")
        self.id_type = id_type
        super().__init__(length=max_identifier_length(id_type))

    def process_bind_param(self, value: Any, dialect: Dialect) -> str | None:
        if value is None:
            return None
        if isinstance(value, str):
            value = self.id_type.parse(value)
        if not isinstance(value, self.id_type):
            raise TypeError(
                f"expected {self.id_type.__name__}, got {type(value).__name__}"
            )
        return str(value)

    def process_result_value(self, value: str | None, dialect: Dialect) -> Any:
        if value is None:
            return None
        return self.id_type.parse(value)


def max_identifier_length(id_type: Any) -> int:
    """Return the longest canonical string ``id_type`` can produce."""
    body = encoded_len(id_type.suffix_type)
    fixed_prefix = getattr(id_type, "PREFIX", None)
    if fixed_prefix is not None:
        return len(fixed_prefix) + 1 + body
    if hasattr(id_type, "PREFIX"):
        return body
    return MAX_PREFIX_LENGTH + 1 + body


def strong_id_column(
    name: str,
    id_type: Any,
    *,
    primary_key: bool = False,
    nullable: bool | None = None,
    length_constraint_name: str | None = None,
) -> Column[Any]:
    """Return a column definition for ``id_type`` with a length check constraint."""
    constraint = identifier_length_check(
        name,
        id_type,
        length_constraint_name or f"ck_{name}_strong_id_length",
    )
    return Column(
        name,
        StrongIdType(id_type),
        constraint,
        primary_key=primary_key,
        nullable=(not primary_key) if nullable is None else nullable,
    )


def identifier_length_check(
    column_name: str, id_type: Any, constraint_name: str
) -> CheckConstraint:
    """Return a CHECK constraint bounding the stored identifier length."""
    return CheckConstraint(
        f"length({column_name}) <= {max_identifier_length(id_type)}",
        name=constraint_name,
    )
