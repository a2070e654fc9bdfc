# file: phonefmt/core/detect.py
"""
Country detection from leading digits.

Every prefix of the input (up to a small bound) is looked up as a dial code;
each prefix with at least one registry match becomes a candidate. Candidates
are ordered longest-prefix-first, so "+49" beats "+4" for "4915123456789".
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from phonefmt.core.digits import extract_digits
from phonefmt.core.registry import CountryRecord, Registry

logger = logging.getLogger(__name__)

# Covers every real dial code (at most 4 digits after the "+").
DEFAULT_MAX_PREFIX_LENGTH = 5


@dataclass(frozen=True, slots=True)
class DetectionCandidate:
    """A dial code that prefixes the input, with the countries sharing it."""

    dial_code: str
    countries: tuple[CountryRecord, ...]
    remaining_digits: str

    @property
    def primary(self) -> CountryRecord:
        """First country in registry order; the tie-break winner."""

        return self.countries[0]

    def to_dict(self) -> dict[str, Any]:
        return {
            "dial_code": self.dial_code,
            "countries": [c.to_dict() for c in self.countries],
            "remaining_digits": self.remaining_digits,
        }


def prefix_bound(registry: Registry) -> int:
    """Longest prefix worth testing: the default, or longer if the registry needs it."""

    return max(DEFAULT_MAX_PREFIX_LENGTH, registry.max_dial_code_digits)


def detect(registry: Registry, phone_number: str) -> list[DetectionCandidate]:
    """
    Return dial-code candidates for `phone_number`, longest prefix first.

    Non-digit characters are ignored. Input without digits yields an empty list.
    """

    digits = extract_digits(phone_number)
    if not digits:
        return []

    candidates: list[DetectionCandidate] = []
    for length in range(1, min(prefix_bound(registry), len(digits)) + 1):
        code = f"+{digits[:length]}"
        countries = registry.all_by_dial_code(code)
        if countries:
            candidates.append(
                DetectionCandidate(
                    dial_code=code,
                    countries=tuple(countries),
                    remaining_digits=digits[length:],
                )
            )

    # sorted() is stable, so equal-length codes keep discovery order.
    candidates = sorted(candidates, key=lambda c: len(c.dial_code), reverse=True)
    logger.debug(
        "Detected %d dial-code candidate(s) for %s: %s",
        len(candidates),
        digits,
        [c.dial_code for c in candidates],
    )
    return candidates
