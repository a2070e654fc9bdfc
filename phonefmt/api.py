# file: phonefmt/api.py
"""
Convenience entry points.

Each function accepts an optional `registry`; without one the packaged dataset
is loaded once and reused.
"""

from __future__ import annotations

from functools import lru_cache

from phonefmt.core import digits as _digits
from phonefmt.core.registry import Registry, load_registry
from phonefmt.core.resolver import AnalysisReport, FormatKind, FormatRequest, PhoneResolver


@lru_cache(maxsize=1)
def default_registry() -> Registry:
    """The packaged registry, loaded on first use."""

    return load_registry()


def _resolver(registry: Registry | None) -> PhoneResolver:
    return PhoneResolver(registry if registry is not None else default_registry())


def format_phone_number(
    phone_number: str,
    *,
    format: FormatKind | str = FormatKind.US,
    country_code: str | None = None,
    auto_detect: bool = False,
    strict: bool = False,
    registry: Registry | None = None,
) -> str:
    """
    Format a phone number.

    Examples:
        >>> format_phone_number("2128691246")
        '+1 (212) 869-1246'
        >>> format_phone_number("15123456789", format="international", country_code="DE")
        '+49 15123456789'

    Raises:
        phonefmt.core.errors.PhoneFormatError: see the subclasses for each case.
    """

    request = FormatRequest(
        kind=format, country_code=country_code, auto_detect=auto_detect, strict=strict
    )
    return _resolver(registry).format(phone_number, request)


def is_valid_phone_number(
    phone_number: str | None,
    *,
    country_code: str | None = None,
    strict: bool = False,
    registry: Registry | None = None,
) -> bool:
    return _resolver(registry).is_valid(phone_number, country_code=country_code, strict=strict)


def extract_digits(phone_number: str | None) -> str:
    return _digits.extract_digits(phone_number)


def get_phone_number_info(
    phone_number: str | None, *, registry: Registry | None = None
) -> AnalysisReport:
    return _resolver(registry).analyze(phone_number)
