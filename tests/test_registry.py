# file: tests/test_registry.py
from __future__ import annotations

import dataclasses
import json
from pathlib import Path

import pytest

from phonefmt.core.errors import RegistryLoadError
from phonefmt.core.registry import (
    CountryRecord,
    Registry,
    flag_for_iso2,
    load_registry,
    normalize_dial_code,
)


def test_packaged_registry_metadata(registry: Registry) -> None:
    assert len(registry) > 200
    assert registry.metadata.version == "1.0.0"
    assert registry.metadata.total_countries == len(registry)
    assert registry.metadata.license == "MIT"


def test_by_dial_code_accepts_missing_plus(registry: Registry) -> None:
    de = registry.by_dial_code("+49")
    assert de is not None
    assert de.name == "Germany"
    assert de.iso2 == "DE"
    assert registry.by_dial_code("49") == de


def test_by_dial_code_not_found(registry: Registry) -> None:
    assert registry.by_dial_code("+999999") is None
    assert registry.by_dial_code("") is None
    assert registry.by_dial_code(None) is None


def test_by_dial_code_returns_first_in_registry_order(registry: Registry) -> None:
    shared = registry.all_by_dial_code("+1")
    assert registry.by_dial_code("+1") == shared[0]


def test_iso_lookups_ignore_case(registry: Registry) -> None:
    us = registry.by_iso2("us")
    assert us is not None
    assert us.name == "United States"
    assert us.dial_code == "+1"

    de = registry.by_iso3("deu")
    assert de is not None
    assert de.name == "Germany"
    assert de.dial_code == "+49"

    assert registry.by_iso2("XX") is None
    assert registry.by_iso3("XXX") is None


def test_by_name_is_substring_first_match(registry: Registry) -> None:
    gb = registry.by_name("United Kingdom")
    assert gb is not None
    assert gb.iso2 == "GB"
    assert gb.dial_code == "+44"

    first_united = registry.by_name("united")
    assert first_united is not None
    assert first_united.name == "United Arab Emirates"

    assert registry.by_name("Atlantis") is None


def test_all_by_dial_code_plus_one_is_shared(registry: Registry) -> None:
    countries = registry.all_by_dial_code("+1")
    names = [c.name for c in countries]
    assert len(countries) > 1
    assert "United States" in names
    assert "Canada" in names
    assert registry.all_by_dial_code("1") == countries
    assert registry.all_by_dial_code("+999999") == []


def test_search_combines_criteria(registry: Registry) -> None:
    results = registry.search(name="United", dial_code="+1")
    names = [c.name for c in results]
    assert "United States" in names
    assert all(c.dial_code == "+1" for c in results)
    assert "United Kingdom" not in names


def test_search_partial_name(registry: Registry) -> None:
    results = registry.search(name="German")
    assert results
    assert results[0].name == "Germany"


def test_search_iso_codes_and_dial_code_normalization(registry: Registry) -> None:
    assert [c.name for c in registry.search(iso2="gb", iso3="GBR")] == ["United Kingdom"]
    assert registry.search(iso2="gb", iso3="DEU") == []
    assert len(registry.search(dial_code="44")) == 4


def test_search_without_criteria_returns_everything(registry: Registry) -> None:
    assert registry.search() == list(registry.countries)


def test_all_dial_codes_numeric_order(registry: Registry) -> None:
    codes = registry.all_dial_codes()
    assert len(codes) == len(set(codes))
    assert codes[0] == "+1"
    assert codes.index("+7") < codes.index("+20") < codes.index("+44")
    assert codes == sorted(codes, key=lambda c: int(c[1:]))
    assert {"+1", "+44", "+49"} <= set(codes)


def test_is_valid_dial_code(registry: Registry) -> None:
    assert registry.is_valid_dial_code("+1")
    assert registry.is_valid_dial_code("49")
    assert not registry.is_valid_dial_code("+999999")


def test_stats(registry: Registry) -> None:
    stats = registry.stats()
    assert stats.total_countries == len(registry)
    assert stats.total_dial_codes == len(registry.all_dial_codes())
    assert stats.version == "1.0.0"
    assert stats.shortest_dial_code == "+1"
    assert stats.longest_dial_code == "+1242"
    assert 2 <= stats.average_dial_code_length <= 5
    assert stats.common_regions == {"+1": 26, "+7": 2, "+44": 4, "+33": 1, "+49": 1}


def test_stats_on_empty_registry() -> None:
    stats = Registry([]).stats()
    assert stats.total_countries == 0
    assert stats.total_dial_codes == 0
    assert stats.average_dial_code_length == 0.0
    assert stats.shortest_dial_code is None
    assert stats.longest_dial_code is None
    assert stats.to_dict()["common_regions"]["+1"] == 0


def test_records_are_immutable(registry: Registry) -> None:
    record = registry.countries[0]
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.name = "Elsewhere"  # type: ignore[misc]


def test_max_dial_code_digits(registry: Registry) -> None:
    assert registry.max_dial_code_digits == 4
    assert Registry([]).max_dial_code_digits == 0


def test_helpers() -> None:
    assert normalize_dial_code("49") == "+49"
    assert normalize_dial_code("+49") == "+49"
    assert flag_for_iso2("DE") == "\U0001F1E9\U0001F1EA"
    assert flag_for_iso2("de") == "\U0001F1E9\U0001F1EA"
    assert flag_for_iso2("D1") == ""
    record = CountryRecord(name="Germany", iso2="DE", iso3="DEU", dial_code="+49")
    assert record.dial_code_digits == "49"


def _write(path: Path, payload: object) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_load_registry_from_file_derives_missing_flags(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "reg.json",
        {
            "metadata": {"version": "9.9.9", "lastUpdated": "2025-01-01"},
            "countries": [
                {"name": "Germany", "iso2": "DE", "iso3": "DEU", "dialCode": "+49"},
                {"name": "France", "iso2": "FR", "iso3": "FRA", "dialCode": "+33", "flag": "fr"},
            ],
        },
    )
    reg = load_registry(path)
    assert len(reg) == 2
    assert reg.metadata.version == "9.9.9"
    assert reg.metadata.last_updated == "2025-01-01"
    assert reg.metadata.total_countries == 2
    assert reg.countries[0].flag == "\U0001F1E9\U0001F1EA"
    assert reg.countries[1].flag == "fr"


@pytest.mark.parametrize(
    "payload",
    [
        {"countries": [{"name": "Germany", "iso2": "DE", "iso3": "DEU", "dialCode": "49"}]},
        {"countries": [{"name": "", "iso2": "DE", "iso3": "DEU", "dialCode": "+49"}]},
        {"metadata": {"version": "1"}},
        [],
    ],
)
def test_load_registry_rejects_invalid_data(tmp_path: Path, payload: object) -> None:
    path = _write(tmp_path / "bad.json", payload)
    with pytest.raises(RegistryLoadError):
        load_registry(path)


def test_load_registry_rejects_unreadable_files(tmp_path: Path) -> None:
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(RegistryLoadError):
        load_registry(broken)
    with pytest.raises(RegistryLoadError):
        load_registry(tmp_path / "missing.json")


def test_record_to_dict_uses_snake_case_keys(registry: Registry) -> None:
    de = registry.by_iso2("DE")
    assert de is not None
    data = de.to_dict()
    assert list(data) == ["name", "iso2", "iso3", "dial_code", "flag"]
    assert data["dial_code"] == "+49"
    assert "dialCode" not in data
