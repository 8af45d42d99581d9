"""Dataclasses and constants for plusminus configuration."""
from __future__ import annotations

import decimal
from dataclasses import dataclass, field
from typing import Any

PLUS_SIGN = "+"             # U+002B
MINUS_SIGN = "\u2212"       # U+2212
HYPHEN_MINUS = "-"          # U+002D

ROUNDING_MODES = {
    "ceiling": decimal.ROUND_CEILING,
    "floor": decimal.ROUND_FLOOR,
    "down": decimal.ROUND_DOWN,
    "up": decimal.ROUND_UP,
    "half_even": decimal.ROUND_HALF_EVEN,
    "half_down": decimal.ROUND_HALF_DOWN,
    "half_up": decimal.ROUND_HALF_UP,
}

PADDING_POSITIONS = (
    "before_prefix",
    "after_prefix",
    "before_suffix",
    "after_suffix",
)

# Options accepted through FormatterConfig.options / **options.
# locale, currency_code and currency_symbol have their own arguments.
OPTION_NAMES = (
    "allows_floats",
    "decimal_separator",
    "always_shows_decimal_separator",
    "currency_decimal_separator",
    "uses_grouping_separator",
    "grouping_separator",
    "grouping_size",
    "secondary_grouping_size",
    "format_width",
    "padding_character",
    "padding_position",
    "rounding_mode",
    "minimum_integer_digits",
    "maximum_integer_digits",
    "minimum_fraction_digits",
    "maximum_fraction_digits",
    "currency_grouping_separator",
    "uses_significant_digits",
    "minimum_significant_digits",
    "maximum_significant_digits",
    "numbering_system",
)


@dataclass
class SignGlyphs:
    """Glyphs substituted for the native sign. Read at format time."""
    positive: str = PLUS_SIGN
    negative: str = MINUS_SIGN


@dataclass
class FormatterConfig:
    """Construction-time configuration for a PositiveCurrencyFormatter.

    locale=None falls back to PLUSMINUS_LOCALE, then the process locale.
    currency_code=None uses the locale territory's currency.
    currency_symbol=None uses the locale's symbol for that currency.
    """
    locale: str | None = None
    currency_code: str | None = None
    currency_symbol: str | None = None
    options: dict[str, Any] = field(default_factory=dict)
