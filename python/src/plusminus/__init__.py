"""plusminus: locale-aware currency formatting with explicit plus and minus signs."""
from .engine import CurrencyEngine, coerce_amount, resolve_locale
from .errors import ConfigurationError, PlusMinusError, RenderError
from .format import format_amount
from .formatter import PositiveCurrencyFormatter
from .types import (
    HYPHEN_MINUS,
    MINUS_SIGN,
    OPTION_NAMES,
    PADDING_POSITIONS,
    PLUS_SIGN,
    ROUNDING_MODES,
    FormatterConfig,
    SignGlyphs,
)

__all__ = [
    "PositiveCurrencyFormatter",
    "CurrencyEngine",
    "format_amount",
    "coerce_amount",
    "resolve_locale",
    "PlusMinusError",
    "ConfigurationError",
    "RenderError",
    "FormatterConfig",
    "SignGlyphs",
    "PLUS_SIGN",
    "MINUS_SIGN",
    "HYPHEN_MINUS",
    "OPTION_NAMES",
    "PADDING_POSITIONS",
    "ROUNDING_MODES",
]
