"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Sample decimal texts shared across tests
- factories: Short constructors for Decimal values
"""

from tests.helpers.constants import FINITE_TEXTS, HIGH_PRECISION_PI, PI_APPROX
from tests.helpers.factories import d, df

__all__ = [
    # Constants
    "FINITE_TEXTS",
    "HIGH_PRECISION_PI",
    "PI_APPROX",
    # Factories
    "d",
    "df",
]
