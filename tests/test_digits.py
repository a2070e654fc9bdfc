# file: tests/test_digits.py
from __future__ import annotations

import pytest

from phonefmt.core.digits import extract_digits, has_only_dialable_chars


def test_extract_digits_strips_punctuation() -> None:
    assert extract_digits("+1 (212) 869-1246") == "12128691246"
    assert extract_digits("+49.151.234") == "49151234"


def test_extract_digits_missing_input_is_empty() -> None:
    assert extract_digits(None) == ""
    assert extract_digits("") == ""
    assert extract_digits("call me") == ""


def test_extract_digits_accepts_non_strings() -> None:
    assert extract_digits(2128691246) == "2128691246"


@pytest.mark.parametrize("raw", ["", "abc", "+1 (212) 869-1246", "  44 7700 900123 ", "٣٤٥"])
def test_extract_digits_is_idempotent(raw: str) -> None:
    once = extract_digits(raw)
    assert extract_digits(once) == once


def test_extract_digits_ignores_non_ascii_digits() -> None:
    assert extract_digits("٣٤٥ 12") == "12"


def test_dialable_chars() -> None:
    assert has_only_dialable_chars("+1 (212) 869-1246")
    assert has_only_dialable_chars("212.869.1246")
    assert not has_only_dialable_chars("212-869-1246 ext 5")
    assert not has_only_dialable_chars("")
