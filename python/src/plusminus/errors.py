"""Error classes for plusminus."""
from __future__ import annotations


class PlusMinusError(Exception):
    """Base error for plusminus operations."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code


class ConfigurationError(PlusMinusError):
    """Raised when the currency engine rejects a locale, currency or option.

    Raised both at construction and when an option is set later.
    """


class RenderError(PlusMinusError):
    """Raised by the engine when a value cannot be rendered.

    PositiveCurrencyFormatter.format() turns this into a None result.
    """

    def __init__(self, code: str, message: str, value: object = None):
        super().__init__(code, message)
        self.value = value
