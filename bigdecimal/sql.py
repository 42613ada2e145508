"""SQLAlchemy column type for Decimal.

Values are stored as their canonical text in a string column, so no
precision is lost to the database's numeric type. Scanning follows the
driver contract of ``Decimal.from_driver_value``: text and bytes are
accepted, anything else raises ScanTypeError.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy.types import String, TypeDecorator

from bigdecimal.number import Decimal


class DecimalType(TypeDecorator):
    """Persist Decimal values as canonical text."""

    impl = String
    cache_ok = True

    @property
    def python_type(self) -> type[Decimal]:
        return Decimal

    def process_bind_param(self, value: Any, dialect: Any) -> str | None:
        if value is None:
            return None
        if not isinstance(value, Decimal):
            raise ValueError(f"DecimalType requires Decimal, got {type(value).__name__}: {value!r}")
        return value.to_driver_value()

    def process_result_value(self, value: Any, dialect: Any) -> Decimal | None:
        if value is None:
            return None
        return Decimal.from_driver_value(value)


__all__ = ["DecimalType"]
