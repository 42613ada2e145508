"""Immutable arbitrary-precision Decimal with an absorbing NaN.

A Decimal is either a valid engine value or NaN. NaN is absorbing:
- Arithmetic touching a NaN operand returns NaN without calling the engine.
- Comparisons touching a NaN operand return False (NaN is never equal,
  not even to itself). ``cmp`` returns 0 for NaN, so every comparison
  method guards NaN on its own instead of reading ``cmp``.

Engine NaNs produced by invalid operations (0/0, Inf - Inf, sqrt(-1)) and
by malformed text collapse into the same NaN. Nothing in this module raises
for a numeric reason; callers check ``is_nan()`` explicitly.

Usage:
    from bigdecimal import Decimal, ONE

    price = Decimal.from_string("19.99")
    total = price.mul(Decimal.from_int(3)).add(ONE)
    total.to_string()  # "60.97"
"""

from __future__ import annotations

import decimal
import math
from collections.abc import Callable
from typing import Any

import structlog
from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from bigdecimal import engine
from bigdecimal.config import DEFAULT_MARSHAL_CONFIG, MarshalConfig
from bigdecimal.errors import ScanTypeError

logger = structlog.get_logger()

_RAW_ZERO = decimal.Decimal(0)
_RAW_NAN = decimal.Decimal("NaN")

_BYTES_TYPES = (bytes, bytearray, memoryview)


class Decimal:
    """Arbitrary-precision decimal value, or NaN.

    The no-argument form is zero. NaN is stored as a missing engine value;
    use the module constant ``NaN`` or ``is_nan()`` rather than comparing.

    Attributes are read-only: every operation returns a new instance.
    """

    __slots__ = ("_value",)
    _value: decimal.Decimal | None

    def __init__(self, value: decimal.Decimal | Decimal = _RAW_ZERO) -> None:
        """Wrap an engine value. Engine NaNs (quiet or signaling) become NaN.

        Raises:
            TypeError: If value is not a decimal.Decimal or Decimal
        """
        if isinstance(value, Decimal):
            raw = value._value
        elif isinstance(value, decimal.Decimal):
            raw = None if value.is_nan() else value
        else:
            raise TypeError(f"Decimal requires decimal.Decimal, got {type(value).__name__}")
        object.__setattr__(self, "_value", raw)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"Decimal is immutable, cannot set '{name}'")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Decimal is immutable, cannot delete '{name}'")

    def __reduce__(self) -> tuple[type[Decimal], tuple[decimal.Decimal]]:
        return (type(self), (self._raw(),))

    def _raw(self) -> decimal.Decimal:
        return _RAW_NAN if self._value is None else self._value

    # --- Construction ---

    @classmethod
    def from_float(cls, value: float) -> Decimal:
        """Create from a native float via its shortest round-tripping text.

        A native NaN is checked up front and yields NaN. Infinities are kept.
        """
        if math.isnan(value):
            return NaN
        return cls(engine.parse(repr(float(value))))

    @classmethod
    def from_string(cls, text: str) -> Decimal:
        """Parse base-10 text (integer, fraction, exponent, Inf, NaN).

        Malformed text yields NaN; this never raises for a str argument.
        """
        raw = engine.parse(text)
        if raw.is_nan():
            if not engine.is_nan_literal(text):
                logger.debug("decimal_parse_failed", text=text[:64])
            return NaN
        return cls(raw)

    @classmethod
    def from_int(cls, value: int) -> Decimal:
        """Create from an integer. Exact: no rounding to engine precision."""
        if not isinstance(value, int):
            raise TypeError(f"Decimal.from_int requires int, got {type(value).__name__}")
        return cls(decimal.Decimal(value))

    @classmethod
    def from_decimal(cls, value: decimal.Decimal) -> Decimal:
        """Create from a standard library decimal.Decimal."""
        return cls(value)

    # --- Arithmetic ---

    def _apply(
        self,
        other: Decimal,
        op: Callable[[decimal.Decimal, decimal.Decimal], decimal.Decimal],
    ) -> Decimal:
        if self._value is None or other._value is None:
            return NaN
        return Decimal(op(self._value, other._value))

    def add(self, addend: Decimal) -> Decimal:
        """Return self + addend."""
        return self._apply(addend, engine.CONTEXT.add)

    def sub(self, subtrahend: Decimal) -> Decimal:
        """Return self - subtrahend."""
        return self._apply(subtrahend, engine.CONTEXT.subtract)

    def mul(self, factor: Decimal) -> Decimal:
        """Return self * factor."""
        return self._apply(factor, engine.CONTEXT.multiply)

    def div(self, denominator: Decimal) -> Decimal:
        """Return self / denominator.

        A non-zero value over zero is a signed infinity; 0/0 is NaN.
        """
        return self._apply(denominator, engine.CONTEXT.divide)

    def frac(self, factor: float) -> Decimal:
        """Return self multiplied by a native float factor."""
        return self.mul(Decimal.from_float(factor))

    def neg(self) -> Decimal:
        """Return self multiplied by -1."""
        return self.mul(Decimal.from_float(-1))

    def abs(self) -> Decimal:
        """Return the absolute value. NaN is returned unchanged."""
        if self.lt(ZERO):
            return self.mul(ONE.neg())
        return self

    def pow(self, exponent: int) -> Decimal:
        """Raise to a non-negative integer power by repeated multiplication.

        NaN propagates for every exponent, zero included: NaN.pow(0) is NaN.

        Raises:
            ValueError: If exponent is negative
        """
        if exponent < 0:
            raise ValueError(f"exponent must be non-negative, got {exponent}")
        if self._value is None:
            return NaN
        if exponent == 0:
            return ONE

        result = self
        for _ in range(1, exponent):
            result = result.mul(self)
        return result

    def sqrt(self) -> Decimal:
        """Return the square root. Negative values give NaN."""
        if self._value is None:
            return NaN
        return Decimal(engine.CONTEXT.sqrt(self._value))

    # --- Comparison ---

    def cmp(self, other: Decimal) -> int:
        """Three-way compare: 1 if self > other, -1 if less, 0 if equal.

        Returns 0 when either side is NaN. Do not read that as equality;
        use eq() instead.
        """
        if self._value is None or other._value is None:
            return 0
        return (self._value > other._value) - (self._value < other._value)

    def eq(self, other: Decimal) -> bool:
        """True if self equals other. Always False when either is NaN."""
        if _any_nan(self, other):
            return False
        return self.cmp(other) == 0

    def lt(self, other: Decimal) -> bool:
        """True if self < other. Always False when either is NaN."""
        if _any_nan(self, other):
            return False
        return self.cmp(other) < 0

    def lte(self, other: Decimal) -> bool:
        """True if self <= other. Always False when either is NaN."""
        if _any_nan(self, other):
            return False
        return self.cmp(other) <= 0

    def gt(self, other: Decimal) -> bool:
        """True if self > other. Always False when either is NaN."""
        if _any_nan(self, other):
            return False
        return self.cmp(other) > 0

    def gte(self, other: Decimal) -> bool:
        """True if self >= other. Always False when either is NaN."""
        if _any_nan(self, other):
            return False
        return self.cmp(other) >= 0

    # --- Queries and conversion ---

    def is_nan(self) -> bool:
        """True if this is not a valid number."""
        return self._value is None

    def is_zero(self) -> bool:
        """True if this equals zero. NaN is never zero."""
        if self._value is None:
            return False
        return self._value.is_zero()

    def to_float(self) -> float:
        """Convert to a native float. Lossy beyond double precision."""
        if self._value is None:
            return math.nan
        return float(self._value)

    def to_decimal(self) -> decimal.Decimal:
        """Convert to a standard library decimal.Decimal (NaN stays NaN)."""
        return self._raw()

    def to_string(self) -> str:
        """Canonical text: "NaN", "Inf", "-Inf" or the shortest decimal form."""
        if self._value is None:
            return engine.NAN_TEXT
        return engine.canonical_text(self._value)

    def to_formatted_string(self, places: int) -> str:
        """Fixed-point text with exactly ``places`` fractional digits.

        Rounds half away from zero, working from the full-precision value
        rather than a float.

        Raises:
            ValueError: If places is negative
        """
        if self._value is None or not self._value.is_finite():
            return self.to_string()
        return engine.fixed_text(self._value, places)

    # --- Marshaling ---

    def to_json(self, config: MarshalConfig = DEFAULT_MARSHAL_CONFIG) -> str:
        """Render as a single JSON token.

        Quoted mode yields a JSON string; unquoted mode a bare JSON number.
        NaN and infinities are not JSON numbers, so they are quoted in
        either mode.
        """
        text = self.to_string()
        if config.quoted:
            return f'"{text}"'
        if self._value is None or not self._value.is_finite():
            logger.debug("decimal_json_forced_quote", value=text)
            return f'"{text}"'
        return text

    @classmethod
    def from_json(cls, raw: str | bytes | bytearray | memoryview) -> Decimal:
        """Parse a JSON token: a bare number or a quoted string.

        Undecodable bytes and malformed text yield NaN.
        """
        if isinstance(raw, _BYTES_TYPES):
            raw = bytes(raw).decode("utf-8", errors="replace")
        text = raw.strip()
        if _is_quoted(text):
            text = text[1:-1]
        return cls.from_string(text)

    def to_driver_value(self) -> str:
        """Value bound to a database parameter: always the canonical text."""
        return self.to_string()

    @classmethod
    def from_driver_value(cls, src: object) -> Decimal:
        """Scan a database value. Accepts text or bytes only.

        Raises:
            ScanTypeError: If src is neither text nor bytes
        """
        if isinstance(src, (str, *_BYTES_TYPES)):
            return cls.from_json(src)

        logger.warning("decimal_scan_type_mismatch", src_type=type(src).__name__)
        raise ScanTypeError(src)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            _validate_field,
            json_schema_input_schema=core_schema.union_schema(
                [core_schema.str_schema(), core_schema.float_schema(), core_schema.int_schema()]
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                _serialize_field, return_schema=core_schema.str_schema(), when_used="json"
            ),
        )

    # --- Python protocol ---

    def __add__(self, other: object) -> Decimal:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.add(operand)

    def __radd__(self, other: object) -> Decimal:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return operand.add(self)

    def __sub__(self, other: object) -> Decimal:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.sub(operand)

    def __rsub__(self, other: object) -> Decimal:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return operand.sub(self)

    def __mul__(self, other: object) -> Decimal:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.mul(operand)

    def __rmul__(self, other: object) -> Decimal:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return operand.mul(self)

    def __truediv__(self, other: object) -> Decimal:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.div(operand)

    def __rtruediv__(self, other: object) -> Decimal:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return operand.div(self)

    def __pow__(self, exponent: object) -> Decimal:
        if not isinstance(exponent, int):
            return NotImplemented
        return self.pow(exponent)

    def __neg__(self) -> Decimal:
        return self.neg()

    def __pos__(self) -> Decimal:
        return self

    def __abs__(self) -> Decimal:
        return self.abs()

    def __eq__(self, other: object) -> bool:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.eq(operand)

    def __lt__(self, other: object) -> bool:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.lt(operand)

    def __le__(self, other: object) -> bool:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.lte(operand)

    def __gt__(self, other: object) -> bool:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.gt(operand)

    def __ge__(self, other: object) -> bool:
        operand = _coerce_operand(other)
        if operand is None:
            return NotImplemented
        return self.gte(operand)

    def __hash__(self) -> int:
        return hash(self._value)

    def __bool__(self) -> bool:
        """False only for zero. NaN is truthy, like float('nan')."""
        return not self.is_zero()

    def __float__(self) -> float:
        return self.to_float()

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"Decimal('{self.to_string()}')"


def _any_nan(*decimals: Decimal) -> bool:
    return any(d.is_nan() for d in decimals)


def _is_quoted(text: str) -> bool:
    return len(text) >= 2 and text[0] == '"' and text[-1] == '"'


def _coerce_operand(other: object) -> Decimal | None:
    """Promote an operator operand. Only Decimal and int take part."""
    if isinstance(other, Decimal):
        return other
    if isinstance(other, int):
        return Decimal.from_int(other)
    return None


def _validate_field(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("Decimal field does not accept bool")
    if isinstance(value, int):
        return Decimal.from_int(value)
    if isinstance(value, float):
        return Decimal.from_float(value)
    if isinstance(value, decimal.Decimal):
        return Decimal.from_decimal(value)
    if isinstance(value, (str, bytes)):
        return Decimal.from_json(value)
    raise ValueError(f"Decimal field requires a number or string, got {type(value).__name__}")


def _serialize_field(value: Decimal) -> str:
    return value.to_string()


# =============================================================================
# Named constants
# =============================================================================

NaN = Decimal(_RAW_NAN)
ZERO = Decimal.from_string("0")
ONE = Decimal.from_string("1")
TEN = Decimal.from_string("10")


def max_of(*values: Decimal) -> Decimal:
    """Return the largest value.

    NaN if any value is NaN, ZERO if there are none.
    """
    if _any_nan(*values):
        return NaN
    if not values:
        return ZERO

    result = Decimal.from_string(engine.NEG_INF_TEXT)
    for value in values:
        if value.gt(result):
            result = value
    return result


def min_of(*values: Decimal) -> Decimal:
    """Return the smallest value.

    NaN if any value is NaN, ZERO if there are none.
    """
    if _any_nan(*values):
        return NaN
    if not values:
        return ZERO

    result = Decimal.from_string(engine.INF_TEXT)
    for value in values:
        if value.lt(result):
            result = value
    return result


__all__ = [
    "Decimal",
    "NaN",
    "ZERO",
    "ONE",
    "TEN",
    "max_of",
    "min_of",
]
