# file: phonefmt/cli.py
"""
phonefmt CLI.

Commands:
  - format: render a number as us / international / national / e164
  - validate: plausibility check (exit code 1 when invalid)
  - info: detection plus every format, optionally exported to JSON/CSV
  - detect: list dial-code candidates for a number
  - countries, dial-codes, stats: registry queries
  - audit: compare the registry with libphonenumber metadata
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable, TypeVar

import click

from phonefmt import __version__
from phonefmt.config import PhonefmtSettings, load_settings
from phonefmt.core.audit import audit_registry
from phonefmt.core.errors import PhoneFormatError, RegistryLoadError
from phonefmt.core.registry import CountryRecord, Registry, load_registry
from phonefmt.core.resolver import FormatKind, FormatRequest, PhoneResolver
from phonefmt.io.report import build_report, export_csv, export_json
from phonefmt.logging_config import configure_logging

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def _common_options(func: F) -> F:
    func = click.option(
        "--registry",
        "registry_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Registry JSON file (default: packaged dataset).",
    )(func)
    func = click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="YAML config path.",
    )(func)
    return func


def _bootstrap(
    config_path: Path | None, registry_path: Path | None
) -> tuple[PhonefmtSettings, Registry]:
    settings = load_settings(yaml_path=config_path)
    configure_logging(level=settings.log_level, json_logging=settings.json_logging)
    logger.debug("Settings: %s", settings.model_dump())
    try:
        registry = load_registry(registry_path or settings.registry_path)
    except RegistryLoadError as exc:
        raise click.ClickException(str(exc)) from exc
    return settings, registry


def _country_line(c: CountryRecord) -> str:
    return f"{c.flag} {c.name} ({c.iso2}/{c.iso3}) {c.dial_code}".strip()


def _human_info(report: dict[str, Any]) -> str:
    lines: list[str] = []
    lines.append(f"Input: {report.get('input', '')}")
    if not report.get("valid"):
        lines.append(f"Error: {report.get('error', '')}")
        return "\n".join(lines) + "\n"

    lines.append(f"Digits: {report.get('digits', '')}")
    lines.append(f"Plausible: {'yes' if report.get('plausible') else 'no'}")
    lines.append("")

    candidates = report.get("possible_countries") or []
    if candidates:
        lines.append("Possible countries:")
        for cand in candidates:
            names = ", ".join(c.get("name", "") for c in cand.get("countries", []))
            lines.append(
                f"  {cand.get('dial_code', '')}: {names} "
                f"(national: {cand.get('remaining_digits', '') or '-'})"
            )
    else:
        lines.append("Possible countries: none")
    lines.append("")

    formats = report.get("formats")
    if isinstance(formats, dict):
        lines.append("Formats:")
        for key in ("us", "international", "national", "e164"):
            value = formats.get(key)
            lines.append(f"  {key}: {value if value is not None else '-'}")

    return "\n".join(lines) + "\n"


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__)
def main() -> None:
    """Phone number formatting and dial-code detection."""


@main.command("format")
@click.argument("number", type=str)
@click.option(
    "--format",
    "fmt",
    type=click.Choice([k.value for k in FormatKind], case_sensitive=False),
    default=None,
    help="Output format (default from config, else us).",
)
@click.option("--country", default=None, help="Country hint: ISO2, ISO3 or dial code.")
@click.option("--auto-detect", is_flag=True, help="Infer the country from the leading digits.")
@click.option("--strict", is_flag=True, help="Enable strict checks.")
@_common_options
def format_cmd(
    number: str,
    fmt: str | None,
    country: str | None,
    auto_detect: bool,
    strict: bool,
    config_path: Path | None,
    registry_path: Path | None,
) -> None:
    """Format NUMBER."""

    settings, registry = _bootstrap(config_path, registry_path)
    request = FormatRequest(
        kind=fmt or settings.default_format,
        country_code=country or settings.default_country,
        auto_detect=auto_detect or settings.auto_detect,
        strict=strict or settings.strict,
    )
    try:
        click.echo(PhoneResolver(registry).format(number, request))
    except PhoneFormatError as exc:
        raise click.ClickException(str(exc)) from exc


@main.command("validate")
@click.argument("number", type=str)
@click.option("--country", default=None, help="Country hint: ISO2, ISO3 or dial code.")
@click.option("--strict", is_flag=True, help="Enable strict validation.")
@_common_options
def validate_cmd(
    number: str,
    country: str | None,
    strict: bool,
    config_path: Path | None,
    registry_path: Path | None,
) -> None:
    """Check whether NUMBER is plausible. Exits with status 1 if not."""

    settings, registry = _bootstrap(config_path, registry_path)
    ok = PhoneResolver(registry).is_valid(
        number, country_code=country or settings.default_country, strict=strict or settings.strict
    )
    click.echo("valid" if ok else "invalid")
    if not ok:
        click.get_current_context().exit(1)


@main.command("info")
@click.argument("number", type=str)
@click.option("--json", "as_json", is_flag=True, help="Print the JSON report.")
@click.option(
    "--report",
    "report_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the JSON report to a file.",
)
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the report as CSV.",
)
@_common_options
def info_cmd(
    number: str,
    as_json: bool,
    report_path: Path | None,
    csv_path: Path | None,
    config_path: Path | None,
    registry_path: Path | None,
) -> None:
    """Detect possible countries for NUMBER and show every format."""

    _, registry = _bootstrap(config_path, registry_path)
    report = build_report(PhoneResolver(registry).analyze(number))

    if report_path is not None:
        export_json(report, report_path)
    if csv_path is not None:
        export_csv(report, csv_path)

    if as_json:
        click.echo(json.dumps(report, indent=2, sort_keys=True, ensure_ascii=False))
    else:
        click.echo(_human_info(report), nl=False)


@main.command("detect")
@click.argument("number", type=str)
@_common_options
def detect_cmd(number: str, config_path: Path | None, registry_path: Path | None) -> None:
    """List dial-code candidates for NUMBER, longest prefix first."""

    _, registry = _bootstrap(config_path, registry_path)
    candidates = PhoneResolver(registry).detect(number)
    if not candidates:
        click.echo("No matching dial code.")
        return
    for cand in candidates:
        click.echo(f"{cand.dial_code} (national: {cand.remaining_digits or '-'})")
        for c in cand.countries:
            click.echo(f"  {_country_line(c)}")


@main.command("countries")
@click.option("--name", default=None, help="Name fragment (case-insensitive).")
@click.option("--dial-code", default=None, help="Dial code, with or without '+'.")
@click.option("--iso2", default=None)
@click.option("--iso3", default=None)
@click.option("--json", "as_json", is_flag=True, help="Print JSON.")
@_common_options
def countries_cmd(
    name: str | None,
    dial_code: str | None,
    iso2: str | None,
    iso3: str | None,
    as_json: bool,
    config_path: Path | None,
    registry_path: Path | None,
) -> None:
    """Search the registry; every given criterion must match."""

    _, registry = _bootstrap(config_path, registry_path)
    results = registry.search(name=name, dial_code=dial_code, iso2=iso2, iso3=iso3)
    if as_json:
        click.echo(json.dumps([c.to_dict() for c in results], indent=2, ensure_ascii=False))
        return
    for c in results:
        click.echo(_country_line(c))
    if not results:
        click.echo("No matching countries.")


@main.command("dial-codes")
@_common_options
def dial_codes_cmd(config_path: Path | None, registry_path: Path | None) -> None:
    """Print every distinct dial code in numeric order."""

    _, registry = _bootstrap(config_path, registry_path)
    for code in registry.all_dial_codes():
        click.echo(code)


@main.command("stats")
@click.option("--json", "as_json", is_flag=True, help="Print JSON.")
@_common_options
def stats_cmd(as_json: bool, config_path: Path | None, registry_path: Path | None) -> None:
    """Show registry statistics."""

    _, registry = _bootstrap(config_path, registry_path)
    stats = registry.stats().to_dict()
    if as_json:
        click.echo(json.dumps(stats, indent=2, sort_keys=True))
        return
    for key, value in stats.items():
        if isinstance(value, dict):
            click.echo(f"{key}:")
            for k, v in value.items():
                click.echo(f"  {k}: {v}")
        else:
            click.echo(f"{key}: {value}")


@main.command("audit")
@_common_options
def audit_cmd(config_path: Path | None, registry_path: Path | None) -> None:
    """Compare registry dial codes with libphonenumber metadata."""

    _, registry = _bootstrap(config_path, registry_path)
    issues = audit_registry(registry)
    for issue in issues:
        click.echo(f"[{issue.kind}] {issue.name} ({issue.iso2}) {issue.dial_code}: {issue.detail}")
    click.echo(f"{len(issues)} issue(s) in {len(registry)} records.")
