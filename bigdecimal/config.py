"""Configuration for decimal precision and JSON marshaling."""

import os
from dataclasses import dataclass

# 78 digits of precision, enough for uint256 values (up to ~10^77)
DEFAULT_PRECISION = 78


def _env_flag(name: str, default: str = "false") -> bool:
    return os.environ.get(name, default).lower() in ("true", "1", "yes")


def _env_precision(name: str) -> int:
    raw = os.environ.get(name, str(DEFAULT_PRECISION))
    try:
        precision = int(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be an integer, got '{raw}'") from err
    if precision < 1:
        raise ValueError(f"{name} must be >= 1, got {precision}")
    return precision


@dataclass(frozen=True)
class MarshalConfig:
    """Options for rendering a Decimal as a JSON token.

    Attributes:
        quoted: If True, emit the value as a JSON string ("3.14").
            If False, emit a bare JSON number (3.14). Values that are not
            valid JSON numbers (NaN, infinities) are always quoted.
    """

    quoted: bool = False


# Configuration from environment variables, read once at import
PRECISION = _env_precision("BIGDECIMAL_PRECISION")

DEFAULT_MARSHAL_CONFIG = MarshalConfig(quoted=_env_flag("BIGDECIMAL_MARSHAL_QUOTED"))

QUOTED = MarshalConfig(quoted=True)
UNQUOTED = MarshalConfig(quoted=False)

__all__ = [
    "DEFAULT_PRECISION",
    "PRECISION",
    "MarshalConfig",
    "DEFAULT_MARSHAL_CONFIG",
    "QUOTED",
    "UNQUOTED",
]
