"""Immutable arbitrary-precision decimals with NaN propagation."""

from bigdecimal.config import DEFAULT_MARSHAL_CONFIG, QUOTED, UNQUOTED, MarshalConfig
from bigdecimal.errors import DecimalError, ScanTypeError
from bigdecimal.number import ONE, TEN, ZERO, Decimal, NaN, max_of, min_of

__version__ = "0.1.0"
__all__ = [
    # Value type
    "Decimal",
    # Constants
    "NaN",
    "ZERO",
    "ONE",
    "TEN",
    # Functions
    "max_of",
    "min_of",
    # Configuration
    "MarshalConfig",
    "DEFAULT_MARSHAL_CONFIG",
    "QUOTED",
    "UNQUOTED",
    # Errors
    "DecimalError",
    "ScanTypeError",
    "__version__",
]
