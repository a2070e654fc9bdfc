# file: phonefmt/core/digits.py
"""
Input sanitizing helpers.

These strip or inspect characters and never consult the registry.
"""

from __future__ import annotations

import re
from typing import Any

_NON_DIGIT = re.compile(r"[^0-9]+")

# Digits, whitespace, parentheses, hyphen, plus and dot.
_DIALABLE = re.compile(r"^[0-9\s()\-+.]+$")


def extract_digits(phone_number: Any) -> str:
    """
    Return only the digit characters of `phone_number`.

    Missing input (None or empty) yields an empty string. Non-string values are
    converted with `str()` first, so `extract_digits(2128691246)` works.
    """

    if phone_number is None:
        return ""
    text = str(phone_number)
    if not text:
        return ""
    return _NON_DIGIT.sub("", text)


def has_only_dialable_chars(phone_number: str) -> bool:
    """True if every character is a digit or common phone punctuation."""

    return bool(_DIALABLE.match(phone_number))
