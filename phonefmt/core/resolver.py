# file: phonefmt/core/resolver.py
"""
Country resolution, formatting, validation and analysis.

`PhoneResolver` is built around an injected `Registry`. It keeps two error
policies apart:

- `format()` fails fast with a `PhoneFormatError` subclass.
- `is_valid()` and `analyze()` never raise; they answer with `False` or an
  `AnalysisReport` carrying an error string.

Ties (several countries sharing a dial code, several candidates) are always
broken by registry order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from phonefmt.core.detect import DetectionCandidate, detect
from phonefmt.core.digits import extract_digits, has_only_dialable_chars
from phonefmt.core.errors import (
    MissingInputError,
    NoDigitsFoundError,
    PhoneFormatError,
    UnknownCountryError,
    UnsupportedFormatError,
)
from phonefmt.core.registry import CountryRecord, Registry
from phonefmt.core.render import (
    render_e164,
    render_international,
    render_national,
    render_us,
)

logger = logging.getLogger(__name__)

MISSING_INPUT_MESSAGE = "Phone number is required"
NO_DIGITS_MESSAGE = "Phone number must contain at least one digit"

# Digit-count window for lenient validation without a country (E.164 max is 15).
MIN_DIGITS = 7
MAX_DIGITS = 15


class FormatKind(str, Enum):
    US = "us"
    INTERNATIONAL = "international"
    NATIONAL = "national"
    E164 = "e164"

    @classmethod
    def parse(cls, value: FormatKind | str) -> FormatKind:
        """Parse a format name case-insensitively ("US" and "us" are the same)."""

        if isinstance(value, FormatKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise UnsupportedFormatError(f"Unsupported format: {value}") from None

    @property
    def requires_country(self) -> bool:
        return self in (FormatKind.INTERNATIONAL, FormatKind.E164)


@dataclass(frozen=True, slots=True)
class FormatRequest:
    """
    Formatting options.

    Fields:
        kind: Output format; strings are parsed with `FormatKind.parse`.
        country_code: Explicit country hint (ISO2, ISO3 or dial code).
        auto_detect: Infer the country from the leading digits when no hint is given.
        strict: Enable strict checks (currently: non-empty international national part).
    """

    kind: FormatKind | str = FormatKind.US
    country_code: str | None = None
    auto_detect: bool = False
    strict: bool = False


@dataclass(frozen=True, slots=True)
class AnalysisReport:
    """Detection plus every output format for a single input."""

    valid: bool
    input: str
    digits: str = ""
    plausible: bool = False
    possible_countries: list[DetectionCandidate] = field(default_factory=list)
    formats: dict[str, str | None] | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "valid": self.valid,
            "input": self.input,
            "digits": self.digits,
            "plausible": self.plausible,
            "possible_countries": [c.to_dict() for c in self.possible_countries],
            "formats": dict(self.formats) if self.formats is not None else None,
            "error": self.error,
        }


class PhoneResolver:
    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    @property
    def registry(self) -> Registry:
        return self._registry

    def detect(self, phone_number: str) -> list[DetectionCandidate]:
        return detect(self._registry, phone_number)

    def lookup_hint(self, hint: str | None) -> CountryRecord | None:
        """Resolve a country hint: ISO2 first, then ISO3, then dial code."""

        if not hint:
            return None
        hint = hint.strip()
        return (
            self._registry.by_iso2(hint)
            or self._registry.by_iso3(hint)
            or self._registry.by_dial_code(hint)
        )

    def resolve_country(self, digits: str, request: FormatRequest) -> CountryRecord | None:
        """
        Pick the target country for `request`, or None when there is no context.

        Raises:
            UnknownCountryError: an explicit hint matched nothing.
        """

        if request.country_code:
            country = self.lookup_hint(request.country_code)
            if country is None:
                raise UnknownCountryError(f"Unknown country code: {request.country_code}")
            return country

        if request.auto_detect:
            candidates = self.detect(digits)
            if candidates:
                return candidates[0].primary
            logger.debug("Auto-detect found no dial code for %s", digits)

        return None

    def format(self, phone_number: str, request: FormatRequest | None = None) -> str:
        """
        Format `phone_number` according to `request` (default: `us`).

        Raises:
            MissingInputError, NoDigitsFoundError, UnsupportedFormatError,
            UnknownCountryError, InvalidLengthError, InvalidCountryPrefixError,
            MissingCountryContextError, EmptyNationalNumberError
        """

        request = request or FormatRequest()
        if not phone_number:
            raise MissingInputError(MISSING_INPUT_MESSAGE)

        digits = extract_digits(phone_number)
        if not digits:
            raise NoDigitsFoundError(NO_DIGITS_MESSAGE)

        kind = FormatKind.parse(request.kind)
        country = self.resolve_country(digits, request)

        if kind is FormatKind.US:
            return render_us(digits)
        if kind is FormatKind.INTERNATIONAL:
            return render_international(digits, country, strict=request.strict)
        if kind is FormatKind.NATIONAL:
            return self._national(digits, country)
        return render_e164(digits, country)

    def _national(self, digits: str, country: CountryRecord | None) -> str:
        if country is None:
            candidates = self.detect(digits)
            if candidates:
                country = candidates[0].primary
                digits = candidates[0].remaining_digits
        return render_national(digits, country)

    def is_valid(
        self, phone_number: str | None, *, country_code: str | None = None, strict: bool = False
    ) -> bool:
        """
        Answer whether `phone_number` is plausible. Never raises.

        With a country hint, lenient mode only requires the hint to resolve and
        strict mode also requires the digits to start with its dial code.
        Without a hint, lenient mode checks for 7 to 15 digits and strict mode
        requires at least 7 digits plus a detectable dial code.
        """

        if phone_number is None:
            return False
        text = str(phone_number)
        if not has_only_dialable_chars(text):
            return False

        digits = extract_digits(text)
        if not digits:
            return False

        if country_code:
            country = self.lookup_hint(country_code)
            if country is None:
                return False
            if strict:
                return digits.startswith(country.dial_code_digits)
            return True

        if strict:
            return len(digits) >= MIN_DIGITS and bool(self.detect(digits))
        return MIN_DIGITS <= len(digits) <= MAX_DIGITS

    def analyze(self, phone_number: str | None) -> AnalysisReport:
        """
        Combine detection and all four formats into one report. Never raises.

        Finding no country is not a failure: the report stays valid with
        `possible_countries == []` and `formats is None`.
        """

        if not phone_number:
            return AnalysisReport(valid=False, input="", error=MISSING_INPUT_MESSAGE)

        text = str(phone_number)
        digits = extract_digits(text)
        if not digits:
            return AnalysisReport(valid=False, input=text, error=NO_DIGITS_MESSAGE)

        candidates = self.detect(digits)
        formats = self._all_formats(digits, candidates[0]) if candidates else None
        return AnalysisReport(
            valid=True,
            input=text,
            digits=digits,
            plausible=self.is_valid(text),
            possible_countries=candidates,
            formats=formats,
        )

    def _all_formats(self, digits: str, top: DetectionCandidate) -> dict[str, str | None]:
        country = top.primary
        renderers = {
            FormatKind.US: lambda: render_us(digits),
            FormatKind.INTERNATIONAL: lambda: render_international(digits, country),
            FormatKind.NATIONAL: lambda: render_national(top.remaining_digits, country),
            FormatKind.E164: lambda: render_e164(digits, country),
        }
        out: dict[str, str | None] = {}
        for kind, render in renderers.items():
            try:
                out[kind.value] = render()
            except PhoneFormatError as exc:
                logger.debug("No %s rendering for %s: %s", kind.value, digits, exc)
                out[kind.value] = None
        return out
