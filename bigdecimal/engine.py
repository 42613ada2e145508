"""Arbitrary-precision engine backing Decimal.

All engine arithmetic runs under a single high-precision ``decimal.Context``
with every trap disabled: invalid operations produce the engine's own NaN
instead of raising, and division by zero produces a signed infinity. The
caller is expected to collapse engine NaNs into its own sentinel.

Text conventions:
- Canonical text drops trailing zeros and uses plain notation while the
  leading digit's exponent is in [PLAIN_MIN_EXPONENT, PLAIN_MAX_EXPONENT),
  lowercase scientific notation otherwise (``1e+30``).
- Infinities render as ``Inf`` / ``-Inf``.
"""

from __future__ import annotations

import decimal
from decimal import ROUND_HALF_EVEN, ROUND_HALF_UP

from bigdecimal.config import PRECISION

CONTEXT = decimal.Context(
    prec=PRECISION,
    rounding=ROUND_HALF_EVEN,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
    traps=[],
)

PLAIN_MIN_EXPONENT = -7
PLAIN_MAX_EXPONENT = 21

INF_TEXT = "Inf"
NEG_INF_TEXT = "-Inf"
NAN_TEXT = "NaN"


def _widened(digits: int) -> decimal.Context:
    """Copy of CONTEXT with at least ``digits`` of precision."""
    context = CONTEXT.copy()
    context.prec = max(CONTEXT.prec, digits)
    return context


def parse(text: str) -> decimal.Decimal:
    """Parse base-10 text, keeping every digit it spells.

    Engine precision applies to arithmetic, not to parsing. Malformed text
    yields an engine NaN rather than raising.
    """
    return _widened(len(text)).create_decimal(text)


def is_nan_literal(text: str) -> bool:
    """True if text spells a NaN the engine accepts (``NaN``, ``-nan``, ``sNaN``)."""
    return text.strip().lstrip("+-").lower().rstrip("0123456789") in ("nan", "snan")


def canonical_text(value: decimal.Decimal) -> str:
    """Shortest text that parses back to the same engine value."""
    if value.is_nan():
        return NAN_TEXT
    if value.is_infinite():
        return NEG_INF_TEXT if value.is_signed() else INF_TEXT
    if value.is_zero():
        return "0"

    normalized = value.normalize(_widened(len(value.as_tuple().digits)))
    if PLAIN_MIN_EXPONENT <= normalized.adjusted() < PLAIN_MAX_EXPONENT:
        return format(normalized, "f")
    return format(normalized, "e")


def fixed_text(value: decimal.Decimal, places: int) -> str:
    """Render a finite value with exactly ``places`` fractional digits.

    Rounds half away from zero. The working precision grows with the
    integer part so large values are never truncated.
    """
    if places < 0:
        raise ValueError(f"places must be non-negative, got {places}")

    exponent = decimal.Decimal((0, (1,), -places))
    context = _widened(value.adjusted() + places + 2)
    quantized = value.quantize(exponent, rounding=ROUND_HALF_UP, context=context)
    return format(quantized, "f")


__all__ = [
    "CONTEXT",
    "PLAIN_MIN_EXPONENT",
    "PLAIN_MAX_EXPONENT",
    "INF_TEXT",
    "NEG_INF_TEXT",
    "NAN_TEXT",
    "parse",
    "is_nan_literal",
    "canonical_text",
    "fixed_text",
]
