# file: phonefmt/core/render.py
"""
Output renderers.

Each renderer takes an already-extracted digit string and, where it needs one,
a resolved country. Country resolution and detection happen in
`phonefmt.core.resolver`; renderers never consult the registry.
"""

from __future__ import annotations

from phonefmt.core.errors import (
    EmptyNationalNumberError,
    InvalidCountryPrefixError,
    InvalidLengthError,
    MissingCountryContextError,
)
from phonefmt.core.registry import CountryRecord

# Countries that get the "(AAA) EEE-NNNN" national layout.
NORTH_AMERICAN_ISO2 = frozenset({"US", "CA"})


def _north_american(ten_digits: str) -> str:
    return f"({ten_digits[:3]}) {ten_digits[3:6]}-{ten_digits[6:]}"


def render_us(digits: str) -> str:
    """
    Render a North American number.

    11 digits must start with the "1" country code; 10 digits get "+1"
    prepended; 7 digits are treated as a local number without area code.

    Raises:
        InvalidCountryPrefixError: 11 digits not starting with "1".
        InvalidLengthError: any length other than 7, 10 or 11.
    """

    if len(digits) == 11:
        if digits[0] != "1":
            raise InvalidCountryPrefixError("11-digit numbers must start with country code 1")
        return f"+1 {_north_american(digits[1:])}"

    if len(digits) == 10:
        return f"+1 {_north_american(digits)}"

    if len(digits) == 7:
        return f"{digits[:3]}-{digits[3:]}"

    raise InvalidLengthError("US phone numbers must be 7, 10, or 11 digits long")


def render_international(
    digits: str, country: CountryRecord | None, *, strict: bool = False
) -> str:
    """
    Render "{dial_code} {national}".

    A leading copy of the dial code is removed first; if the digits do not start
    with it they are used as-is.
    """

    if country is None:
        raise MissingCountryContextError(
            "Cannot format as international without country information"
        )

    dial_digits = country.dial_code_digits
    national = digits[len(dial_digits):] if digits.startswith(dial_digits) else digits
    if strict and not national:
        raise EmptyNationalNumberError(
            f"No national number left after removing dial code {country.dial_code}"
        )
    return f"{country.dial_code} {national}"


def render_national(digits: str, country: CountryRecord | None) -> str:
    """
    Render the national form.

    Only the United States and Canada have a real layout, and only for exactly
    10 digits. Everything else falls back to the bare digit string.
    """

    if country is None or country.iso2.upper() not in NORTH_AMERICAN_ISO2:
        return digits
    if len(digits) == 10:
        return _north_american(digits)
    return digits


def render_e164(digits: str, country: CountryRecord | None) -> str:
    """Render "+{digits}", prepending the dial code unless it is already there."""

    if country is None:
        raise MissingCountryContextError("Cannot format as E.164 without country information")

    dial_digits = country.dial_code_digits
    if digits.startswith(dial_digits):
        return f"+{digits}"
    return f"+{dial_digits}{digits}"
