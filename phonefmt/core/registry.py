# file: phonefmt/core/registry.py
"""
Country dial-code registry.

The registry is an immutable, ordered collection of `CountryRecord` entries.
Dial codes and (in practice) ISO2 codes are not unique, so every singular lookup
returns the first match in registry order. That tie-break is the documented
policy; callers needing every match use `all_by_dial_code` or `search`.

Lookups never raise: absence is `None` or an empty list.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, Iterator

from pydantic import BaseModel, Field, ValidationError
from pydantic import ConfigDict as PydanticConfigDict

from phonefmt.core.errors import RegistryLoadError

logger = logging.getLogger(__name__)

# Record counts reported by `Registry.stats()`. "+1" counts every code that
# starts with it (the whole North American plan); the rest are exact.
REFERENCE_DIAL_CODES = ("+1", "+7", "+44", "+33", "+49")


def normalize_dial_code(code: str) -> str:
    """Prefix `code` with "+" unless it already has one."""

    return code if code.startswith("+") else f"+{code}"


def flag_for_iso2(iso2: str) -> str:
    """Build a flag emoji from an ISO2 code using regional indicator symbols."""

    if len(iso2) != 2 or not iso2.isascii() or not iso2.isalpha():
        return ""
    return "".join(chr(0x1F1E6 + ord(c) - ord("A")) for c in iso2.upper())


@dataclass(frozen=True, slots=True)
class CountryRecord:
    """A single registry entry."""

    name: str
    iso2: str
    iso3: str
    dial_code: str
    flag: str = ""

    @property
    def dial_code_digits(self) -> str:
        return self.dial_code.lstrip("+")

    def to_dict(self) -> dict[str, str]:
        return {
            "name": self.name,
            "iso2": self.iso2,
            "iso3": self.iso3,
            "dial_code": self.dial_code,
            "flag": self.flag,
        }


@dataclass(frozen=True, slots=True)
class RegistryMetadata:
    version: str = ""
    last_updated: str = ""
    total_countries: int = 0
    description: str = ""
    license: str = ""


@dataclass(frozen=True, slots=True)
class RegistryStats:
    """Descriptive aggregate counts over a registry."""

    total_countries: int
    total_dial_codes: int
    average_dial_code_length: float
    shortest_dial_code: str | None
    longest_dial_code: str | None
    common_regions: dict[str, int]
    version: str
    last_updated: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_countries": self.total_countries,
            "total_dial_codes": self.total_dial_codes,
            "average_dial_code_length": self.average_dial_code_length,
            "shortest_dial_code": self.shortest_dial_code,
            "longest_dial_code": self.longest_dial_code,
            "common_regions": dict(self.common_regions),
            "version": self.version,
            "last_updated": self.last_updated,
        }


def _dial_code_sort_key(code: str) -> int:
    digits = code.lstrip("+")
    return int(digits) if digits.isdigit() else 0


class Registry:
    """
    Read-only lookups over an ordered tuple of country records.

    Instances are built once (usually via `load_registry`) and passed to the
    resolver, which keeps test registries with synthetic countries easy to use.
    """

    def __init__(
        self, countries: Iterable[CountryRecord], *, metadata: RegistryMetadata | None = None
    ) -> None:
        self._countries: tuple[CountryRecord, ...] = tuple(countries)
        self.metadata = metadata or RegistryMetadata(total_countries=len(self._countries))

    def __len__(self) -> int:
        return len(self._countries)

    def __iter__(self) -> Iterator[CountryRecord]:
        return iter(self._countries)

    @property
    def countries(self) -> tuple[CountryRecord, ...]:
        return self._countries

    @property
    def max_dial_code_digits(self) -> int:
        return max((len(c.dial_code_digits) for c in self._countries), default=0)

    def by_dial_code(self, code: str | None) -> CountryRecord | None:
        """First record whose dial code equals `code` (a missing "+" is added)."""

        if not code:
            return None
        normalized = normalize_dial_code(code)
        return next((c for c in self._countries if c.dial_code == normalized), None)

    def by_iso2(self, code: str | None) -> CountryRecord | None:
        if not code:
            return None
        wanted = code.lower()
        return next((c for c in self._countries if c.iso2.lower() == wanted), None)

    def by_iso3(self, code: str | None) -> CountryRecord | None:
        if not code:
            return None
        wanted = code.lower()
        return next((c for c in self._countries if c.iso3.lower() == wanted), None)

    def by_name(self, fragment: str | None) -> CountryRecord | None:
        """First record whose name contains `fragment`, ignoring case."""

        if not fragment:
            return None
        wanted = fragment.lower()
        return next((c for c in self._countries if wanted in c.name.lower()), None)

    def all_by_dial_code(self, code: str | None) -> list[CountryRecord]:
        if not code:
            return []
        normalized = normalize_dial_code(code)
        return [c for c in self._countries if c.dial_code == normalized]

    def search(
        self,
        *,
        name: str | None = None,
        dial_code: str | None = None,
        iso2: str | None = None,
        iso3: str | None = None,
    ) -> list[CountryRecord]:
        """
        Return every record matching all provided criteria.

        Each criterion uses the same rules as the matching single-field lookup:
        substring for `name`, normalized exact match for `dial_code`, and
        case-insensitive exact match for the ISO codes.
        """

        name_l = name.lower() if name else None
        dial = normalize_dial_code(dial_code) if dial_code else None
        iso2_l = iso2.lower() if iso2 else None
        iso3_l = iso3.lower() if iso3 else None

        out: list[CountryRecord] = []
        for c in self._countries:
            if name_l is not None and name_l not in c.name.lower():
                continue
            if dial is not None and c.dial_code != dial:
                continue
            if iso2_l is not None and c.iso2.lower() != iso2_l:
                continue
            if iso3_l is not None and c.iso3.lower() != iso3_l:
                continue
            out.append(c)
        return out

    def all_dial_codes(self) -> list[str]:
        """Distinct dial codes ordered by numeric value ("+7" < "+20" < "+44")."""

        unique = list(dict.fromkeys(c.dial_code for c in self._countries))
        return sorted(unique, key=_dial_code_sort_key)

    def is_valid_dial_code(self, code: str | None) -> bool:
        return self.by_dial_code(code) is not None

    def stats(self) -> RegistryStats:
        codes = self.all_dial_codes()

        shortest: str | None = None
        longest: str | None = None
        for code in codes:
            if shortest is None or len(code) < len(shortest):
                shortest = code
            if longest is None or len(code) > len(longest):
                longest = code

        average = sum(len(code) for code in codes) / len(codes) if codes else 0.0

        regions: dict[str, int] = {}
        for ref in REFERENCE_DIAL_CODES:
            if ref == "+1":
                regions[ref] = sum(1 for c in self._countries if c.dial_code.startswith(ref))
            else:
                regions[ref] = sum(1 for c in self._countries if c.dial_code == ref)

        return RegistryStats(
            total_countries=len(self._countries),
            total_dial_codes=len(codes),
            average_dial_code_length=average,
            shortest_dial_code=shortest,
            longest_dial_code=longest,
            common_regions=regions,
            version=self.metadata.version,
            last_updated=self.metadata.last_updated,
        )


class _CountryEntry(BaseModel):
    model_config = PydanticConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(min_length=1)
    iso2: str = Field(min_length=2, max_length=2)
    iso3: str = Field(min_length=3, max_length=3)
    dial_code: str = Field(alias="dialCode", pattern=r"^\+[0-9]+$")
    flag: str = ""


class _MetadataEntry(BaseModel):
    model_config = PydanticConfigDict(extra="ignore", populate_by_name=True)

    version: str = ""
    last_updated: str = Field(default="", alias="lastUpdated")
    total_countries: int = Field(default=0, alias="totalCountries")
    description: str = ""
    license: str = ""


class _RegistryFile(BaseModel):
    model_config = PydanticConfigDict(extra="ignore")

    metadata: _MetadataEntry = Field(default_factory=_MetadataEntry)
    countries: list[_CountryEntry]


def parse_registry(raw: Any) -> Registry:
    """
    Build a registry from decoded JSON data.

    Raises:
        RegistryLoadError: if the data does not match the registry file schema.
    """

    try:
        parsed = _RegistryFile.model_validate(raw)
    except ValidationError as exc:
        raise RegistryLoadError(f"Invalid registry data: {exc}") from exc

    countries = [
        CountryRecord(
            name=e.name,
            iso2=e.iso2,
            iso3=e.iso3,
            dial_code=e.dial_code,
            flag=e.flag or flag_for_iso2(e.iso2),
        )
        for e in parsed.countries
    ]
    meta = parsed.metadata
    metadata = RegistryMetadata(
        version=meta.version,
        last_updated=meta.last_updated,
        total_countries=meta.total_countries or len(countries),
        description=meta.description,
        license=meta.license,
    )
    return Registry(countries, metadata=metadata)


def load_registry(path: Path | None = None) -> Registry:
    """
    Load a registry from a JSON file, defaulting to the packaged dataset.

    Raises:
        RegistryLoadError: if the file cannot be read, is not JSON, or fails validation.
    """

    try:
        if path is not None:
            text = path.read_text(encoding="utf-8")
            source = str(path)
        else:
            text = (
                resources.files("phonefmt.data")
                .joinpath("countries.json")
                .read_text(encoding="utf-8")
            )
            source = "phonefmt.data/countries.json"
    except OSError as exc:
        raise RegistryLoadError(f"Cannot read registry file: {exc}") from exc

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise RegistryLoadError(f"Registry file is not valid JSON: {exc}") from exc

    registry = parse_registry(raw)
    logger.info("Loaded %d countries from %s", len(registry), source)
    return registry
