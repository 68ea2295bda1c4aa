"""Command-line interface for encoding, decoding and generating identifiers."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable

import httpx
import typer

from strong_id.config import StrongIdSettings, activate_settings, load_settings
from strong_id.conformance import (
    DEFAULT_BASE_URL,
    ConformanceReport,
    fetch_cases,
    load_fixture_dir,
    parse_invalid_cases,
    parse_valid_cases,
    run_conformance,
)
from strong_id.dynamic import DynamicStrongId
from strong_id.errors import StrongIdError, exception_to_error
from strong_id.fixed import strong_id
from strong_id.logging import configure_logging
from strong_id.values import SUFFIX_TYPES, Id, Uuid

SUCCESS_EXIT_CODE = 0
CONFORMANCE_FAILURE_EXIT_CODE = 1
INVALID_INPUT_EXIT_CODE = 2
IDENTIFIER_ERROR_EXIT_CODE = 3
FETCH_ERROR_EXIT_CODE = 4


class SuffixKind(str, Enum):
    """Suffix types selectable on the command line."""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    U128 = "u128"
    USIZE = "usize"
    UUID = "uuid"

    @property
    def suffix_type(self) -> type[Id]:
        return SUFFIX_TYPES[self.value]


class UuidVersion(str, Enum):
    """UUID versions available to ``generate``."""

    V4 = "4"
    V7 = "7"


@dataclass(frozen=True)
class CliConfig:
    """Global CLI runtime options."""

    as_json: bool
    settings: StrongIdSettings


@dataclass(frozen=True)
class CommandOutput:
    """Result of one command: structured data plus its human rendering."""

    data: Any
    text: str


def _emit_output(output: CommandOutput, as_json: bool) -> None:
    """Render command output in requested format."""
    if as_json:
        typer.echo(json.dumps(output.data, sort_keys=True, separators=(",", ":")))
        return
    typer.echo(output.text)


def _emit_error(exc: Exception, as_json: bool) -> None:
    """Render one normalized error to stderr."""
    error = exception_to_error(exc)
    if as_json:
        payload = asdict(error)
        payload["category"] = error.category.value
        typer.echo(json.dumps({"error": payload}, sort_keys=True), err=True)
        return
    typer.echo(f"error: {error.message} ({error.code})", err=True)


def _run_command(cfg: CliConfig, invoke: Callable[[], CommandOutput]) -> None:
    """Execute one command and map outputs/errors to process semantics."""
    try:
        output = invoke()
    except StrongIdError as exc:
        _emit_error(exc, cfg.as_json)
        raise typer.Exit(code=IDENTIFIER_ERROR_EXIT_CODE) from exc
    except (ValueError, OverflowError, TypeError, OSError) as exc:
        _emit_error(exc, cfg.as_json)
        raise typer.Exit(code=INVALID_INPUT_EXIT_CODE) from exc
    except httpx.HTTPError as exc:
        _emit_error(exc, cfg.as_json)
        raise typer.Exit(code=FETCH_ERROR_EXIT_CODE) from exc

    _emit_output(output, cfg.as_json)
    raise typer.Exit(code=SUCCESS_EXIT_CODE)


def _require_config(ctx: typer.Context) -> CliConfig:
    """Return required CLI config from Typer context."""
    config = ctx.obj
    if not isinstance(config, CliConfig):
        raise RuntimeError("CLI configuration not initialized")
    return config


def _raw_value(kind: SuffixKind, value: str) -> object:
    """Convert command-line text into the raw backing value for ``kind``."""
    if kind is SuffixKind.UUID:
        return Uuid(value)
    return int(value, 0)


def _describe(identifier: Any, kind: SuffixKind) -> dict[str, Any]:
    return {
        "id": str(identifier),
        "prefix": identifier.prefix,
        "type": kind.value,
        "value": str(identifier.id),
    }


def _encode(kind: SuffixKind, value: str, prefix: str | None) -> CommandOutput:
    id_type = DynamicStrongId[kind.suffix_type]
    identifier = id_type.from_optional_prefix(prefix, _raw_value(kind, value))
    return CommandOutput(data=_describe(identifier, kind), text=str(identifier))


def _decode(kind: SuffixKind, text: str, expect_prefix: str | None) -> CommandOutput:
    if expect_prefix is None:
        identifier = DynamicStrongId[kind.suffix_type].parse(text)
    else:
        identifier = strong_id("ExpectedId", kind.suffix_type, expect_prefix).parse(text)
    data = _describe(identifier, kind)
    lines = [f"prefix: {data['prefix'] or '-'}", f"value: {data['value']}"]
    return CommandOutput(data=data, text="\n".join(lines))


def _generate(prefix: str | None, version: UuidVersion, count: int) -> CommandOutput:
    id_type = DynamicStrongId[Uuid]
    make = id_type.now_v7 if version is UuidVersion.V7 else id_type.new_v4
    identifiers = [str(make(prefix)) for _ in range(count)]
    return CommandOutput(data=identifiers, text="\n".join(identifiers))


def _conformance(fixtures: Path | None, base_url: str, timeout: float) -> CommandOutput:
    if fixtures is not None:
        valid, invalid = load_fixture_dir(fixtures)
    else:
        with httpx.Client(timeout=timeout) as client:
            valid = parse_valid_cases(fetch_cases("valid", base_url=base_url, client=client))
            invalid = parse_invalid_cases(
                fetch_cases("invalid", base_url=base_url, client=client)
            )
    report = run_conformance(valid, invalid)
    if not report.ok:
        raise _ConformanceFailed(report)
    return _report_output(report)


def _report_output(report: ConformanceReport) -> CommandOutput:
    data = {
        "ok": report.ok,
        "total": len(report.results),
        "failures": [asdict(item) for item in report.failures],
    }
    lines = [f"{len(report.results) - len(report.failures)}/{len(report.results)} checks passed"]
    lines.extend(
        f"FAIL {item.kind}::{item.variant}::{item.name}: {item.detail}"
        for item in report.failures
    )
    return CommandOutput(data=data, text="\n".join(lines))


class _ConformanceFailed(Exception):
    """Raised internally to route a failed report to its exit code."""

    def __init__(self, report: ConformanceReport) -> None:
        super().__init__("conformance checks failed")
        self.report = report


app = typer.Typer(no_args_is_help=True, help="Strongly typed identifier tools")


@app.callback()
def main(
    ctx: typer.Context,
    as_json: bool = typer.Option(False, "--json", help="Emit JSON output"),
    config: Path | None = typer.Option(
        None,
        "--config",
        envvar="STRONG_ID_CONFIG",
        help="Path to a strong_id YAML config file",
    ),
    log_level: str | None = typer.Option(None, help="Override logging level"),
) -> None:
    """Load settings, configure logging, and store global options."""
    cli_params = {"logging": {"level": log_level.upper()}} if log_level else None
    settings = load_settings(cli_params=cli_params, config_path=config)
    activate_settings(settings)
    configure_logging(
        level=settings.logging.level,
        json_output=settings.logging.json_output,
        service=settings.logging.service,
        environment=settings.logging.environment,
    )
    ctx.obj = CliConfig(as_json=as_json, settings=settings)


@app.command("encode")
def encode_command(
    ctx: typer.Context,
    value: str = typer.Argument(..., help="Raw value (integer or UUID)"),
    kind: SuffixKind = typer.Option(SuffixKind.UUID, "--type", "-t", help="Suffix type"),
    prefix: str | None = typer.Option(None, "--prefix", "-p", help="Optional prefix"),
) -> None:
    """Encode a raw value as an identifier."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda: _encode(kind, value, prefix))


@app.command("decode")
def decode_command(
    ctx: typer.Context,
    text: str = typer.Argument(..., help="Identifier to decode"),
    kind: SuffixKind = typer.Option(SuffixKind.UUID, "--type", "-t", help="Suffix type"),
    expect_prefix: str | None = typer.Option(
        None, "--expect-prefix", help="Require exactly this prefix"
    ),
) -> None:
    """Decode an identifier into its prefix and raw value."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda: _decode(kind, text, expect_prefix))


@app.command("generate")
def generate_command(
    ctx: typer.Context,
    prefix: str | None = typer.Option(None, "--prefix", "-p", help="Optional prefix"),
    version: UuidVersion = typer.Option(UuidVersion.V7, "--version", help="UUID version"),
    count: int = typer.Option(1, min=1, help="Number of identifiers to generate"),
) -> None:
    """Generate new UUID-backed identifiers."""
    cfg = _require_config(ctx)
    _run_command(cfg, lambda: _generate(prefix, version, count))


@app.command("conformance")
def conformance_command(
    ctx: typer.Context,
    fixtures: Path | None = typer.Option(
        None,
        "--fixtures",
        exists=True,
        file_okay=False,
        help="Directory holding valid/invalid fixture files",
    ),
    base_url: str = typer.Option(DEFAULT_BASE_URL, help="Base URL of the fixture files"),
    timeout: float = typer.Option(10.0, min=0.001, help="Download timeout in seconds"),
) -> None:
    """Check TypeID conformance against the published fixture cases."""
    cfg = _require_config(ctx)
    try:
        _run_command(cfg, lambda: _conformance(fixtures, base_url, timeout))
    except _ConformanceFailed as failed:
        _emit_output(_report_output(failed.report), cfg.as_json)
        raise typer.Exit(code=CONFORMANCE_FAILURE_EXIT_CODE) from failed


if __name__ == "__main__":
    app()
