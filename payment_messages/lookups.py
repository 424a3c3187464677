"""
ISO reference data lookups backed by pycountry.

Codes must be supplied in upper case, exactly as the gateway expects them.
"""

from __future__ import annotations

import pycountry


def _is_code(value, length: int) -> bool:
    return isinstance(value, str) and len(value) == length and value.isalpha() and value.isupper()


def is_valid_country(code) -> bool:
    """True if ``code`` is an ISO 3166-1 alpha-2 country code."""
    if not _is_code(code, 2):
        return False
    return pycountry.countries.get(alpha_2=code) is not None


def is_valid_state(country, state) -> bool:
    """True if ``state`` is an ISO 3166-2 subdivision of ``country``.

    ``state`` is the part after the hyphen, e.g. 'CA' for 'US-CA'.
    """
    if not is_valid_country(country) or not isinstance(state, str) or not state or state != state.upper():
        return False
    return pycountry.subdivisions.get(code=f'{country}-{state}') is not None


def is_valid_currency(code) -> bool:
    """True if ``code`` is an ISO 4217 alphabetic currency code."""
    if not _is_code(code, 3):
        return False
    return pycountry.currencies.get(alpha_3=code) is not None
