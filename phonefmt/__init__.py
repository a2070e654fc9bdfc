# file: phonefmt/__init__.py
"""
phonefmt - phone number formatting and dial-code detection.

This package normalizes and validates phone numbers against an international
dial-code registry, infers candidate countries from leading digits, and renders
numbers in US, international, national and E.164 formats.
"""

from __future__ import annotations

__version__ = "0.1.0"

from phonefmt.api import (  # noqa: E402
    default_registry,
    extract_digits,
    format_phone_number,
    get_phone_number_info,
    is_valid_phone_number,
)

__all__ = [
    "__version__",
    "default_registry",
    "extract_digits",
    "format_phone_number",
    "get_phone_number_info",
    "is_valid_phone_number",
]
