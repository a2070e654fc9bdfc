# file: tests/test_report.py
from __future__ import annotations

import csv
import json
from pathlib import Path

from phonefmt.core.resolver import PhoneResolver
from phonefmt.io.report import build_report, export_csv, export_json


def test_build_report_wraps_analysis(resolver: PhoneResolver) -> None:
    report = build_report(resolver.analyze("447700900123"))
    assert report["metadata"]["tool"] == "phonefmt"
    assert report["metadata"]["generated_at"]
    assert report["digits"] == "447700900123"
    assert report["formats"]["e164"] == "+447700900123"


def test_export_json(tmp_path: Path, resolver: PhoneResolver) -> None:
    report = build_report(resolver.analyze("4915123456789"))
    out = tmp_path / "report.json"
    export_json(report, out)
    loaded = json.loads(out.read_text(encoding="utf-8"))
    assert loaded["possible_countries"][0]["dial_code"] == "+49"
    assert loaded["possible_countries"][0]["countries"][0]["name"] == "Germany"


def test_export_csv(tmp_path: Path, resolver: PhoneResolver) -> None:
    report = build_report(resolver.analyze("447700900123"))
    out = tmp_path / "report.csv"
    export_csv(report, out)

    with out.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))

    assert [r["row_index"] for r in rows] == [str(i) for i in range(1, len(rows) + 1)]
    kv = {(r["section"], r["key"]): r["value"] for r in rows if r["row_type"] == "kv"}
    assert kv[("metadata", "tool")] == "phonefmt"
    assert kv[("summary", "digits")] == "447700900123"
    assert kv[("formats", "international")] == "+44 7700900123"
    assert kv[("formats", "us")] == ""

    candidates = [r for r in rows if r["row_type"] == "candidate"]
    assert {r["iso2"] for r in candidates} >= {"GB", "JE", "GG", "IM"}
    assert all(r["dial_code"] == "+44" for r in candidates)


def test_export_csv_for_failed_analysis(tmp_path: Path, resolver: PhoneResolver) -> None:
    report = build_report(resolver.analyze(""))
    out = tmp_path / "empty.csv"
    export_csv(report, out)
    with out.open(newline="", encoding="utf-8") as f:
        rows = list(csv.DictReader(f))
    kv = {(r["section"], r["key"]): r["value"] for r in rows}
    assert kv[("summary", "valid")] == "False"
    assert kv[("summary", "error")] == "Phone number is required"
    assert not any(r["row_type"] == "candidate" for r in rows)
