# file: phonefmt/core/errors.py
"""
Formatting error taxonomy.

Formatting entry points raise these immediately on the first violated
precondition. Validation and analysis never raise them; they report
`False` or an error string instead.
"""

from __future__ import annotations


class PhoneFormatError(ValueError):
    """Base class for every error raised while formatting a phone number."""


class MissingInputError(PhoneFormatError):
    """Raised when the phone number is empty or missing."""


class NoDigitsFoundError(PhoneFormatError):
    """Raised when the input contains no numeric characters at all."""


class UnknownCountryError(PhoneFormatError):
    """Raised when an explicit country hint matches no ISO2, ISO3 or dial code."""


class UnsupportedFormatError(PhoneFormatError):
    """Raised when the requested format kind is not recognized."""


class InvalidLengthError(PhoneFormatError):
    """Raised when a `us` format input is not 7, 10 or 11 digits long."""


class InvalidCountryPrefixError(PhoneFormatError):
    """Raised when an 11-digit `us` format input does not start with 1."""


class MissingCountryContextError(PhoneFormatError):
    """Raised when `international`/`e164` formatting has no country to work with."""


class EmptyNationalNumberError(PhoneFormatError):
    """Raised in strict mode when nothing remains after removing the dial code."""


class RegistryLoadError(ValueError):
    """Raised when a registry data file cannot be read or fails validation."""
