# file: phonefmt/io/report.py
"""
Report generation and export helpers.

Reports are plain dictionaries (JSON-serializable) built from an
`AnalysisReport`, so the same structure serves the CLI, JSON and CSV.
"""

from __future__ import annotations

import csv
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping

from phonefmt import __version__
from phonefmt.core.resolver import AnalysisReport

CSV_FIELDNAMES = [
    "row_index",
    "row_type",
    "section",
    "key",
    "value",
    "dial_code",
    "remaining_digits",
    "country",
    "iso2",
    "iso3",
]


def utc_now_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat()


def build_report(analysis: AnalysisReport) -> dict[str, Any]:
    """Wrap an analysis in a report with tool metadata."""

    return {
        "metadata": {
            "tool": "phonefmt",
            "version": __version__,
            "generated_at": utc_now_iso(),
        },
        **analysis.to_dict(),
    }


def export_json(report: Mapping[str, Any], path: Path) -> None:
    """Write a report to disk as pretty-printed JSON."""

    path.write_text(
        json.dumps(report, indent=2, sort_keys=True, ensure_ascii=False), encoding="utf-8"
    )


def _safe_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (str, int, float, bool)):
        return str(value)
    return json.dumps(value, ensure_ascii=True)


def _blank_row(row_type: str, section: str) -> dict[str, str]:
    row = {name: "" for name in CSV_FIELDNAMES}
    row["row_type"] = row_type
    row["section"] = section
    return row


def _kv_rows(section: str, data: Mapping[str, Any] | None) -> list[dict[str, str]]:
    if not isinstance(data, Mapping):
        return []
    rows: list[dict[str, str]] = []
    for key in sorted(data.keys()):
        row = _blank_row("kv", section)
        row["key"] = _safe_str(key)
        row["value"] = _safe_str(data.get(key))
        rows.append(row)
    return rows


def _candidate_rows(report: Mapping[str, Any]) -> list[dict[str, str]]:
    candidates = report.get("possible_countries")
    if not isinstance(candidates, list):
        return []
    rows: list[dict[str, str]] = []
    for cand in candidates:
        if not isinstance(cand, dict):
            continue
        for country in cand.get("countries") or []:
            if not isinstance(country, dict):
                continue
            row = _blank_row("candidate", "possible_countries")
            row["dial_code"] = _safe_str(cand.get("dial_code"))
            row["remaining_digits"] = _safe_str(cand.get("remaining_digits"))
            row["country"] = _safe_str(country.get("name"))
            row["iso2"] = _safe_str(country.get("iso2"))
            row["iso3"] = _safe_str(country.get("iso3"))
            rows.append(row)
    return rows


def export_csv(report: Mapping[str, Any], path: Path) -> None:
    """
    Export a report as CSV.

    Key/value rows cover metadata, the summary fields and formats; each
    (candidate dial code, country) pair gets its own row.
    """

    summary = {k: report.get(k) for k in ("input", "digits", "valid", "plausible", "error")}

    rows: list[dict[str, str]] = []
    rows.extend(_kv_rows("metadata", report.get("metadata")))
    rows.extend(_kv_rows("summary", summary))
    rows.extend(_kv_rows("formats", report.get("formats")))
    rows.extend(_candidate_rows(report))

    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_FIELDNAMES)
        writer.writeheader()
        for idx, row in enumerate(rows, start=1):
            row["row_index"] = str(idx)
            writer.writerow(row)
