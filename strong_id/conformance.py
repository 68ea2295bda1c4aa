"""TypeID conformance checks against the published fixture cases.

The TypeID repository publishes ``valid`` cases (``name``, ``typeid``,
``prefix``, ``uuid``) and ``invalid`` cases (``name``, ``typeid``,
``description``). Every valid case must encode and decode identically through
both the dynamic and the fixed-prefix identifier types; every invalid case
must be rejected by both.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Literal, Sequence

import httpx
import yaml
from pydantic import BaseModel, ConfigDict, TypeAdapter

from strong_id.dynamic import DynamicStrongId
from strong_id.errors import exception_to_error
from strong_id.fixed import StrongUuid, strong_uuid
from strong_id.logging import fields, get_logger, log_context
from strong_id.values import Uuid

DEFAULT_BASE_URL = "https://raw.githubusercontent.com/jetpack-io/typeid/main/spec"
INVALID_CASE_FIXED_PREFIX = "prefix"

CaseKind = Literal["valid", "invalid"]

_LOGGER = get_logger(__name__)
_UUID_ID = DynamicStrongId[Uuid]


class _CaseModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class ValidCase(_CaseModel):
    """One identifier that must round-trip exactly."""

    name: str
    typeid: str
    prefix: str
    uuid: str


class InvalidCase(_CaseModel):
    """One string that must fail to parse."""

    name: str
    typeid: str
    description: str = ""


@dataclass(frozen=True)
class CaseResult:
    """Outcome of one case against one identifier variant."""

    kind: CaseKind
    variant: Literal["dynamic", "fixed"]
    name: str
    passed: bool
    detail: str | None = None


@dataclass(frozen=True)
class ConformanceReport:
    """Aggregated results of one conformance run."""

    results: tuple[CaseResult, ...]

    @property
    def failures(self) -> tuple[CaseResult, ...]:
        return tuple(item for item in self.results if not item.passed)

    @property
    def ok(self) -> bool:
        return not self.failures


def load_cases(path: str | Path) -> list[dict[str, Any]]:
    """Load raw case mappings from a local ``.json`` or ``.yaml`` fixture file."""
    resolved = Path(path)
    with resolved.open("r", encoding="utf-8") as handle:
        if resolved.suffix in {".yaml", ".yml"}:
            parsed = yaml.safe_load(handle)
        else:
            parsed = json.load(handle)
    if not isinstance(parsed, list):
        raise ValueError(f"Fixture file must contain a top-level list: {resolved}")
    return parsed


def load_fixture_dir(directory: str | Path) -> tuple[list[ValidCase], list[InvalidCase]]:
    """Load ``valid`` and ``invalid`` cases from a directory of fixture files."""
    root = Path(directory)
    return (
        parse_valid_cases(load_cases(_fixture_path(root, "valid"))),
        parse_invalid_cases(load_cases(_fixture_path(root, "invalid"))),
    )


def fetch_cases(
    kind: CaseKind,
    *,
    base_url: str = DEFAULT_BASE_URL,
    client: httpx.Client | None = None,
    timeout: float = 10.0,
) -> list[dict[str, Any]]:
    """Download raw case mappings for ``kind`` from ``base_url``."""
    url = f"{base_url.rstrip('/')}/{kind}.json"
    if client is None:
        with httpx.Client(timeout=timeout) as owned:
            response = owned.get(url)
    else:
        response = client.get(url)
    response.raise_for_status()
    parsed = response.json()
    if not isinstance(parsed, list):
        raise ValueError(f"Fixture response must contain a top-level list: {url}")
    return parsed


def parse_valid_cases(raw: Iterable[Any]) -> list[ValidCase]:
    return TypeAdapter(list[ValidCase]).validate_python(list(raw))


def parse_invalid_cases(raw: Iterable[Any]) -> list[InvalidCase]:
    return TypeAdapter(list[InvalidCase]).validate_python(list(raw))


def run_conformance(
    valid: Sequence[ValidCase], invalid: Sequence[InvalidCase]
) -> ConformanceReport:
    """Check every case against the dynamic and fixed-prefix identifier types."""
    results: list[CaseResult] = []
    for case in valid:
        results.append(_check_valid_dynamic(case))
        results.append(_check_valid_fixed(case))
    for case in invalid:
        results.append(_check_invalid_dynamic(case))
        results.append(_check_invalid_fixed(case))

    report = ConformanceReport(results=tuple(results))
    for failure in report.failures:
        with log_context({fields.CASE_KIND: failure.kind, fields.CASE_NAME: failure.name}):
            _LOGGER.warning("Conformance case failed (%s): %s", failure.variant, failure.detail)
    with log_context(
        {
            fields.CASE_COUNT: len(report.results),
            fields.FAILURE_COUNT: len(report.failures),
        }
    ):
        _LOGGER.info("Conformance run complete")
    return report


def _check_valid_dynamic(case: ValidCase) -> CaseResult:
    expected_prefix = case.prefix or None
    try:
        value = Uuid(case.uuid)
        encoded = _UUID_ID.from_optional_prefix(case.prefix, value)
        decoded = _UUID_ID.parse(case.typeid)
    except ValueError as exc:
        return _failed("valid", "dynamic", case.name, exc)

    problems = _compare(
        ("encode", str(encoded), case.typeid),
        ("decode", decoded.id, value),
        ("prefix", decoded.prefix, expected_prefix),
        ("reformat", str(decoded), case.typeid),
    )
    return _result("valid", "dynamic", case.name, problems)


def _check_valid_fixed(case: ValidCase) -> CaseResult:
    try:
        id_type = _fixed_type(case.prefix)
        value = Uuid(case.uuid)
        encoded = id_type(value)
        decoded = id_type.parse(case.typeid)
    except ValueError as exc:
        return _failed("valid", "fixed", case.name, exc)

    problems = _compare(
        ("encode", str(encoded), case.typeid),
        ("decode", decoded.id, value),
        ("reformat", str(decoded), case.typeid),
    )
    return _result("valid", "fixed", case.name, problems)


def _check_invalid_dynamic(case: InvalidCase) -> CaseResult:
    try:
        _UUID_ID.parse(case.typeid)
    except ValueError:
        return CaseResult(kind="invalid", variant="dynamic", name=case.name, passed=True)
    return _accepted("dynamic", case)


def _check_invalid_fixed(case: InvalidCase) -> CaseResult:
    try:
        _fixed_type(INVALID_CASE_FIXED_PREFIX).parse(case.typeid)
    except ValueError:
        return CaseResult(kind="invalid", variant="fixed", name=case.name, passed=True)
    return _accepted("fixed", case)


@lru_cache(maxsize=None)
def _fixed_type(prefix: str) -> type[StrongUuid]:
    """Return one cached fixed-prefix ``Uuid`` identifier type per prefix."""
    return strong_uuid("ConformanceId", prefix or None, module=__name__)


def _compare(*checks: tuple[str, Any, Any]) -> list[str]:
    return [
        f"{label}: expected {expected!r}, got {actual!r}"
        for label, actual, expected in checks
        if actual != expected
    ]


def _result(
    kind: CaseKind, variant: Literal["dynamic", "fixed"], name: str, problems: list[str]
) -> CaseResult:
    return CaseResult(
        kind=kind,
        variant=variant,
        name=name,
        passed=not problems,
        detail="; ".join(problems) or None,
    )


def _failed(
    kind: CaseKind, variant: Literal["dynamic", "fixed"], name: str, exc: Exception
) -> CaseResult:
    error = exception_to_error(exc)
    return CaseResult(
        kind=kind,
        variant=variant,
        name=name,
        passed=False,
        detail=f"{error.code}: {error.message}",
    )


def _accepted(variant: Literal["dynamic", "fixed"], case: InvalidCase) -> CaseResult:
    return CaseResult(
        kind="invalid",
        variant=variant,
        name=case.name,
        passed=False,
        detail=f"accepted invalid input: {case.description or case.typeid}",
    )


def _fixture_path(root: Path, kind: CaseKind) -> Path:
    for suffix in (".json", ".yaml", ".yml"):
        candidate = root / f"{kind}{suffix}"
        if candidate.exists():
            return candidate
    raise FileNotFoundError(f"No {kind} fixture file in {root}")
