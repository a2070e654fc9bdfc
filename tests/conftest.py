# file: tests/conftest.py
from __future__ import annotations

from typing import Callable

import pytest

from phonefmt.api import default_registry
from phonefmt.core.registry import CountryRecord, Registry
from phonefmt.core.resolver import PhoneResolver

RegistryFactory = Callable[..., Registry]


@pytest.fixture(scope="session")
def registry() -> Registry:
    return default_registry()


@pytest.fixture()
def resolver(registry: Registry) -> PhoneResolver:
    return PhoneResolver(registry)


def _make_registry(*rows: tuple[str, str, str, str]) -> Registry:
    return Registry(
        CountryRecord(name=name, iso2=iso2, iso3=iso3, dial_code=dial)
        for name, iso2, iso3, dial in rows
    )


@pytest.fixture()
def make_registry() -> RegistryFactory:
    """Build a synthetic registry from (name, iso2, iso3, dial_code) rows."""

    return _make_registry
