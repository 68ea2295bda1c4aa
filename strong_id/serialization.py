"""Pydantic integration for identifier types.

Identifiers serialize as their canonical string and validate by parsing it.
Parse failures surface as ``ValidationError`` entries of type ``strong_id``
whose message is the identifier error text and whose context carries the
stable error code.
"""

from __future__ import annotations

from typing import Any

from pydantic_core import PydanticCustomError, core_schema

from strong_id.errors import StrongIdError

ERROR_TYPE = "strong_id"


def identifier_core_schema(id_type: Any) -> core_schema.CoreSchema:
    """Build the pydantic core schema for one concrete identifier type."""
    if getattr(id_type, "suffix_type", None) is None:
        raise TypeError(
            f"{id_type.__name__} has no suffix type; use a parametrized or "
            "declared identifier type as a model field"
        )

    def _parse(value: str) -> Any:
        try:
            return id_type.parse(value)
        except StrongIdError as exc:
            raise PydanticCustomError(
                ERROR_TYPE,
                "{message}",
                {"message": str(exc), "code": exc.code},
            ) from exc

    def _validate(value: Any) -> Any:
        if isinstance(value, id_type):
            return value
        if not isinstance(value, str):
            raise PydanticCustomError(
                ERROR_TYPE,
                "expected {type_name} or str",
                {"type_name": id_type.__name__},
            )
        return _parse(value)

    return core_schema.json_or_python_schema(
        json_schema=core_schema.chain_schema(
            [
                core_schema.str_schema(),
                core_schema.no_info_plain_validator_function(_parse),
            ]
        ),
        python_schema=core_schema.no_info_plain_validator_function(_validate),
        serialization=core_schema.to_string_ser_schema(when_used="always"),
    )
