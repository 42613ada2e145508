"""Error classes for bigdecimal."""


class DecimalError(Exception):
    """Base error for bigdecimal operations."""

    pass


class ScanTypeError(DecimalError, TypeError):
    """A database value could not be scanned because it is not text.

    Raised before any parsing is attempted: the input shape was wrong,
    not the number it might contain.
    """

    def __init__(self, src: object) -> None:
        self.src = src
        super().__init__(f"Passed value {src} should be a string")


__all__ = ["DecimalError", "ScanTypeError"]
