"""PositiveCurrencyFormatter: currency strings with explicit plus and minus signs.

Wraps a CurrencyEngine and rewrites the native sign glyph of its output so
positive amounts carry a plus sign, negative amounts a true minus sign
(U+2212, not a hyphen), and zero carries neither.

Render failures are logged to stderr (prefix PLUSMINUS_RENDER_WARN) and
returned as None, never raised.
"""
from __future__ import annotations

import sys
import time
from typing import Any

from .engine import CurrencyEngine, coerce_amount
from .errors import RenderError
from .types import HYPHEN_MINUS, MINUS_SIGN, FormatterConfig, SignGlyphs


def _forward(name: str) -> property:
    """Property that reads and writes the engine option of the same name."""

    def fget(self):
        return getattr(self._engine, name)

    def fset(self, value):
        setattr(self._engine, name, value)

    return property(fget, fset, doc=f"See CurrencyEngine.{name}.")


class PositiveCurrencyFormatter:
    """Format amounts with a proper plus or minus sign for any locale.

    Positive amounts are rendered through their negative form and the sign is
    swapped, so the plus sign lands exactly where the locale puts a minus,
    with the same spacing and direction marks.

    Example::

        nf = PositiveCurrencyFormatter("nl_NL", "EUR", "€")
        nf.format(-123.65)   # '€\\xa0−123,65'
        nf.format(123.65)    # '€\\xa0+123,65'
        nf.format(0)         # '€\\xa00,00'

    Args:
        locale: Locale identifier (None: PLUSMINUS_LOCALE, then the process locale)
        currency_code: ISO 4217 code (None: the locale's currency)
        currency_symbol: Symbol override (None: the locale's symbol)
        options: Engine options, see types.OPTION_NAMES
        log_failures: Emit PLUSMINUS_RENDER_WARN to stderr on render failures
        engine: Use this engine instead of building a CurrencyEngine

    Raises:
        ConfigurationError: If the engine rejects the configuration.
    """

    def __init__(
        self,
        locale: str | None = None,
        currency_code: str | None = None,
        currency_symbol: str | None = None,
        *,
        options: dict[str, Any] | None = None,
        log_failures: bool = True,
        engine: Any = None,
    ):
        if engine is None:
            engine = CurrencyEngine(locale, currency_code, currency_symbol, **(options or {}))
        self._engine = engine
        self._log_failures = log_failures
        self.signs = SignGlyphs()
        # Throttle: (currency, error_code) -> last_warn_time
        self._warn_throttle: dict[tuple[str, str], float] = {}

    @classmethod
    def from_config(cls, config: FormatterConfig, **kwargs: Any) -> PositiveCurrencyFormatter:
        return cls(
            config.locale,
            config.currency_code,
            config.currency_symbol,
            options=dict(config.options),
            **kwargs,
        )

    @property
    def engine(self) -> Any:
        return self._engine

    # -- sign glyphs --------------------------------------------------------

    @property
    def positive_sign(self) -> str:
        """Glyph for amounts above zero. Default: + PLUS SIGN (U+002B)."""
        return self.signs.positive

    @positive_sign.setter
    def positive_sign(self, glyph: str) -> None:
        self.signs.positive = glyph

    @property
    def negative_sign(self) -> str:
        """Glyph for amounts below zero. Default: − MINUS SIGN (U+2212)."""
        return self.signs.negative

    @negative_sign.setter
    def negative_sign(self, glyph: str) -> None:
        self.signs.negative = glyph

    def set_positive_sign(self, glyph: str) -> None:
        self.positive_sign = glyph

    def set_negative_sign(self, glyph: str) -> None:
        self.negative_sign = glyph

    # -- formatting ---------------------------------------------------------

    def format(self, amount: Any) -> str | None:
        """Format amount with the configured sign glyphs.

        Returns None if the engine cannot render the amount.
        """
        try:
            number = coerce_amount(amount)
            if number > 0:
                text = self._engine.render(number.copy_negate())
                return (
                    text.replace(HYPHEN_MINUS, self.signs.positive)
                    .replace(MINUS_SIGN, self.signs.positive)
                )
            text = self._engine.render(number)
        except RenderError as exc:
            if self._log_failures:
                self._warn(amount, exc.code)
            return None
        return text.replace(HYPHEN_MINUS, self.signs.negative)

    def _warn(self, amount: Any, error: str) -> None:
        """Emit PLUSMINUS_RENDER_WARN to stderr, throttled to once per 60s per (currency, error)."""
        currency = getattr(self._engine, "currency_code", "unknown")
        key = (currency, error)
        now = time.monotonic()
        last = self._warn_throttle.get(key)
        if last is not None and now - last < 60.0:
            return
        self._warn_throttle[key] = now

        print(
            f"PLUSMINUS_RENDER_WARN locale={getattr(self._engine, 'locale', 'unknown')} "
            f"currency={currency} amount={amount!r} error={error.lower()}",
            file=sys.stderr,
        )

    # -- engine options -----------------------------------------------------

    locale = _forward("locale")
    currency_code = _forward("currency_code")
    currency_symbol = _forward("currency_symbol")
    allows_floats = _forward("allows_floats")
    decimal_separator = _forward("decimal_separator")
    always_shows_decimal_separator = _forward("always_shows_decimal_separator")
    currency_decimal_separator = _forward("currency_decimal_separator")
    uses_grouping_separator = _forward("uses_grouping_separator")
    grouping_separator = _forward("grouping_separator")
    currency_grouping_separator = _forward("currency_grouping_separator")
    grouping_size = _forward("grouping_size")
    secondary_grouping_size = _forward("secondary_grouping_size")
    format_width = _forward("format_width")
    padding_character = _forward("padding_character")
    padding_position = _forward("padding_position")
    rounding_mode = _forward("rounding_mode")
    minimum_integer_digits = _forward("minimum_integer_digits")
    maximum_integer_digits = _forward("maximum_integer_digits")
    minimum_fraction_digits = _forward("minimum_fraction_digits")
    maximum_fraction_digits = _forward("maximum_fraction_digits")
    uses_significant_digits = _forward("uses_significant_digits")
    minimum_significant_digits = _forward("minimum_significant_digits")
    maximum_significant_digits = _forward("maximum_significant_digits")
    numbering_system = _forward("numbering_system")

    def __repr__(self) -> str:
        return (
            f"PositiveCurrencyFormatter(engine={self._engine!r}, "
            f"positive_sign={self.signs.positive!r}, negative_sign={self.signs.negative!r})"
        )
