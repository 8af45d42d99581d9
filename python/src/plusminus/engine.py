"""Locale-aware currency rendering engine, backed by Babel.

CurrencyEngine renders numbers in currency style for one locale and currency.
It has no opinion about sign glyphs: negative values come out with whatever
sign the locale's currency pattern carries (U+002D for CLDR data), and exact
zero comes out unsigned.

Babel covers the locale data, symbols and rounding. The engine layers the
option set on top of it (digit counts, grouping sizes, separator overrides,
padding) by building a number pattern per render and touching only the digit
run of Babel's output afterwards.
"""
from __future__ import annotations

import decimal
import os
import re
from typing import Any, Callable

from babel.core import Locale, UnknownLocaleError, default_locale
from babel.numbers import (
    UnknownCurrencyError,
    UnsupportedNumberingSystemError,
    format_currency,
    get_currency_precision,
    get_currency_symbol,
    get_decimal_symbol,
    get_group_symbol,
    get_territory_currencies,
    validate_currency,
)

from .errors import ConfigurationError, RenderError
from .types import OPTION_NAMES, PADDING_POSITIONS, ROUNDING_MODES


_DEFAULT_LOCALE = "en_US"
_LOCALE_ENV = "PLUSMINUS_LOCALE"

# Grouping size babel.numbers.parse_grouping reports for "no grouping".
_NO_GROUPING = 1000

# Private-use placeholder for the currency symbol while Babel renders.
_SYMBOL_MARK = "\ue000"
_CURRENCY_SIGN_RE = re.compile("¤+")
_SUBPATTERN_RE = re.compile(
    r"(?P<prefix>(?:'[^']*'|[^0-9@#.,'])*)(?P<number>[0-9@#.,]*)(?P<suffix>.*)",
    re.DOTALL,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def resolve_locale(locale: str | Locale | None = None) -> str | Locale:
    """Pick the locale to use when the caller gives none.

    Order: explicit argument, PLUSMINUS_LOCALE, the process LC_MONETARY
    locale (via Babel), then en_US.
    """
    return (
        locale
        or os.environ.get(_LOCALE_ENV)
        or default_locale("LC_MONETARY")
        or _DEFAULT_LOCALE
    )


def parse_locale(value: str | Locale) -> Locale:
    if isinstance(value, Locale):
        return value
    try:
        return Locale.parse(value)
    except (UnknownLocaleError, ValueError, TypeError) as exc:
        raise ConfigurationError("UNKNOWN_LOCALE", f"Unknown locale: {value!r}") from exc


def coerce_amount(value: Any) -> decimal.Decimal:
    """Convert an amount to Decimal. Floats go through str() so 123.65 stays 123.65.

    Raises:
        RenderError: If the value is not numeric or is NaN.
    """
    if isinstance(value, decimal.Decimal):
        number = value
    else:
        try:
            number = decimal.Decimal(value if isinstance(value, int) else str(value))
        except (decimal.InvalidOperation, TypeError, ValueError) as exc:
            raise RenderError("NOT_A_NUMBER", f"Not a number: {value!r}", value) from exc
    if number.is_nan():
        raise RenderError("NOT_A_NUMBER", f"Not a number: {value!r}", value)
    return number


def _babel_numbering_name(name: str) -> str:
    """Map "native" to Babel's "default": the locale's own numbering system."""
    return "default" if name == "native" else name


def _magnitude_rounding(mode: str, negative: bool) -> str:
    """Babel rounds the absolute value, so ceiling and floor flip for negatives."""
    if mode == "ceiling":
        return decimal.ROUND_DOWN if negative else decimal.ROUND_UP
    if mode == "floor":
        return decimal.ROUND_UP if negative else decimal.ROUND_DOWN
    return ROUNDING_MODES[mode]


def _territory_currency(locale: Locale) -> str:
    if not locale.territory:
        raise ConfigurationError(
            "CURRENCY_REQUIRED",
            f"Locale {locale} has no territory; pass a currency code",
        )
    currencies = get_territory_currencies(locale.territory)
    if not currencies:
        raise ConfigurationError(
            "CURRENCY_REQUIRED",
            f"No current currency for territory {locale.territory}",
        )
    return currencies[0]


# ---------------------------------------------------------------------------
# Option validation
# ---------------------------------------------------------------------------

def _flag(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigurationError("INVALID_OPTION", f"{name} must be a bool, got {value!r}")
    return value


def _count(name: str, value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ConfigurationError(
            "INVALID_OPTION", f"{name} must be a non-negative int, got {value!r}"
        )
    return value


def _text(name: str, value: Any) -> str | None:
    if value is not None and not isinstance(value, str):
        raise ConfigurationError("INVALID_OPTION", f"{name} must be a str, got {value!r}")
    return value


def _glyph(name: str, value: Any) -> str:
    if not isinstance(value, str) or not value:
        raise ConfigurationError(
            "INVALID_OPTION", f"{name} must be a non-empty str, got {value!r}"
        )
    return value


def _choice(choices) -> Callable[[str, Any], str]:
    def check(name: str, value: Any) -> str:
        if value not in choices:
            raise ConfigurationError(
                "INVALID_OPTION",
                f"{name} must be one of {', '.join(sorted(choices))}; got {value!r}",
            )
        return value
    return check


class _Option:
    """Validated engine option.

    Setting None (where the checker allows it) resets the option; reading an
    unset option returns its default, which may be computed from the engine.
    """

    def __init__(self, check: Callable[[str, Any], Any], default: Any = None):
        self.check = check
        self.default = default

    def __set_name__(self, owner, name):
        self.name = name
        self.attr = f"_{name}"

    def __get__(self, engine, owner=None):
        if engine is None:
            return self
        value = engine.__dict__.get(self.attr)
        if value is None:
            return self.default(engine) if callable(self.default) else self.default
        return value

    def __set__(self, engine, value):
        engine.__dict__[self.attr] = self.check(self.name, value)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class CurrencyEngine:
    """Currency-style number renderer for one locale and currency.

    Example::

        engine = CurrencyEngine("nl_NL", "EUR")
        engine.render(-123.65)   # '€\\xa0-123,65'

    Args:
        locale: Locale identifier or babel Locale (None: see resolve_locale)
        currency_code: ISO 4217 code (None: currency of the locale's territory)
        currency_symbol: Symbol override (None: the locale's symbol)
        **options: Any of types.OPTION_NAMES

    Raises:
        ConfigurationError: If Babel rejects the locale, currency or an option.
    """

    allows_floats = _Option(_flag, True)
    always_shows_decimal_separator = _Option(_flag, False)
    uses_grouping_separator = _Option(_flag, True)
    uses_significant_digits = _Option(_flag, False)

    decimal_separator = _Option(
        _text,
        lambda e: get_decimal_symbol(e._locale, numbering_system=e._babel_numbering_system),
    )
    grouping_separator = _Option(
        _text,
        lambda e: get_group_symbol(e._locale, numbering_system=e._babel_numbering_system),
    )
    currency_decimal_separator = _Option(_text, lambda e: e.decimal_separator)
    currency_grouping_separator = _Option(_text, lambda e: e.grouping_separator)

    grouping_size = _Option(_count, lambda e: e._locale_pattern().grouping[0])
    secondary_grouping_size = _Option(_count, lambda e: e._locale_pattern().grouping[1])

    minimum_integer_digits = _Option(_count, lambda e: e._locale_pattern().int_prec[0])
    maximum_integer_digits = _Option(_count)
    minimum_fraction_digits = _Option(_count, lambda e: get_currency_precision(e.currency_code))
    maximum_fraction_digits = _Option(_count, lambda e: get_currency_precision(e.currency_code))
    minimum_significant_digits = _Option(_count, 1)
    maximum_significant_digits = _Option(_count, 6)

    format_width = _Option(_count, 0)
    padding_character = _Option(_glyph, " ")
    padding_position = _Option(_choice(PADDING_POSITIONS), "before_prefix")
    rounding_mode = _Option(_choice(ROUNDING_MODES), "half_even")

    def __init__(
        self,
        locale: str | Locale | None = None,
        currency_code: str | None = None,
        currency_symbol: str | None = None,
        **options: Any,
    ):
        self.locale = resolve_locale(locale)
        self._numbering_system = "latn"
        self.currency_code = currency_code
        self.currency_symbol = currency_symbol
        self.configure(**options)

    def configure(self, **options: Any) -> None:
        """Set several options at once. Unknown names are rejected."""
        for name, value in options.items():
            if name not in OPTION_NAMES:
                raise ConfigurationError("UNKNOWN_OPTION", f"Unknown formatting option: {name!r}")
            setattr(self, name, value)

    # -- locale / currency --------------------------------------------------

    @property
    def locale(self) -> str | Locale:
        """The locale as it was set: an identifier string or a babel Locale."""
        return self._locale_value

    @locale.setter
    def locale(self, value: str | Locale) -> None:
        self._locale = parse_locale(value)
        self._locale_value = value

    @property
    def currency_code(self) -> str:
        return self._currency_code

    @currency_code.setter
    def currency_code(self, value: str | None) -> None:
        if value is None:
            value = _territory_currency(self._locale)
        if not isinstance(value, str):
            raise ConfigurationError("UNKNOWN_CURRENCY", f"Unknown currency: {value!r}")
        try:
            validate_currency(value.upper())
        except UnknownCurrencyError as exc:
            raise ConfigurationError("UNKNOWN_CURRENCY", f"Unknown currency: {value!r}") from exc
        self._currency_code = value.upper()

    @property
    def currency_symbol(self) -> str:
        if self._currency_symbol is not None:
            return self._currency_symbol
        return get_currency_symbol(self._currency_code, self._locale)

    @currency_symbol.setter
    def currency_symbol(self, value: str | None) -> None:
        self._currency_symbol = _text("currency_symbol", value)

    @property
    def numbering_system(self) -> str:
        return self._numbering_system

    @numbering_system.setter
    def numbering_system(self, value: str) -> None:
        _glyph("numbering_system", value)
        try:
            get_decimal_symbol(self._locale, numbering_system=_babel_numbering_name(value))
        except UnsupportedNumberingSystemError as exc:
            raise ConfigurationError(
                "INVALID_OPTION",
                f"Numbering system {value!r} not available for {self._locale}",
            ) from exc
        self._numbering_system = value

    @property
    def _babel_numbering_system(self) -> str:
        return _babel_numbering_name(self._numbering_system)

    # -- rendering ----------------------------------------------------------

    def render(self, value: Any) -> str:
        """Render value in currency style.

        Raises:
            RenderError: If value is not a number or Babel cannot render it.
        """
        number = coerce_amount(value)
        try:
            with decimal.localcontext() as context:
                context.rounding = _magnitude_rounding(self.rounding_mode, number.is_signed())
                if self.maximum_integer_digits is not None and number.is_finite():
                    number = number % (10 ** self.maximum_integer_digits)
                if number.is_zero():
                    number = number.copy_abs()
                text = format_currency(
                    number,
                    self._currency_code,
                    format=self._pattern(),
                    locale=self._locale,
                    currency_digits=False,
                    numbering_system=self._babel_numbering_system,
                )
        except (decimal.InvalidOperation, ValueError) as exc:
            raise RenderError("RENDER_FAILED", f"Cannot render {value!r}: {exc}", value) from exc
        return self._finish(text)

    def _locale_pattern(self):
        return self._locale.currency_formats["standard"]

    def _pattern(self) -> str:
        """The locale's currency pattern with our number part and a symbol placeholder."""
        positive, _, negative = self._locale_pattern().pattern.partition(";")
        match = _SUBPATTERN_RE.match(positive)
        pattern = match.group("prefix") + self._number_pattern() + match.group("suffix")
        if negative:
            pattern = f"{pattern};{negative}"
        return _CURRENCY_SIGN_RE.sub(_SYMBOL_MARK, pattern)

    def _number_pattern(self) -> str:
        if self.uses_significant_digits:
            low = max(self.minimum_significant_digits, 1)
            high = max(self.maximum_significant_digits, low)
            return "@" * low + "#" * (high - low)

        min_int = self.minimum_integer_digits
        primary = self.grouping_size
        secondary = self.secondary_grouping_size or primary
        if self.uses_grouping_separator and 0 < primary < _NO_GROUPING:
            width = max(min_int, primary + secondary + 1)
            digits = "#" * (width - min_int) + "0" * min_int
            integer = ",".join((
                digits[:-(primary + secondary)],
                digits[-(primary + secondary):-primary],
                digits[-primary:],
            ))
        else:
            integer = "0" * min_int or "#"

        low = self.minimum_fraction_digits
        high = max(self.maximum_fraction_digits, low)
        if not high:
            return integer
        return f"{integer}.{'0' * low}{'#' * (high - low)}"

    def _finish(self, text: str) -> str:
        """Apply separator overrides and padding, then put the symbol in."""
        positions = [i for i, ch in enumerate(text) if ch.isdigit() or ch == "∞"]
        start, end = (positions[0], positions[-1] + 1) if positions else (len(text), len(text))

        body = self._swap_separators(text[start:end])
        decimal_separator = self.currency_decimal_separator
        if positions and self.always_shows_decimal_separator and decimal_separator not in body:
            body += decimal_separator
        text = text[:start] + body + text[end:]
        end = start + len(body)

        symbol = self.currency_symbol
        width = len(text) + text.count(_SYMBOL_MARK) * (len(symbol) - 1)
        missing = self.format_width - width
        if missing > 0:
            pad = (self.padding_character * missing)[:missing]
            at = {
                "before_prefix": 0,
                "after_prefix": start,
                "before_suffix": end,
                "after_suffix": len(text),
            }[self.padding_position]
            text = text[:at] + pad + text[at:]

        return text.replace(_SYMBOL_MARK, symbol)

    def _swap_separators(self, body: str) -> str:
        native = (
            (get_decimal_symbol(self._locale, numbering_system=self._babel_numbering_system),
             self.currency_decimal_separator),
            (get_group_symbol(self._locale, numbering_system=self._babel_numbering_system),
             self.currency_grouping_separator),
        )
        swaps = {old: new for old, new in native if old != new}
        if not swaps:
            return body
        pattern = "|".join(re.escape(old) for old in sorted(swaps, key=len, reverse=True))
        return re.sub(pattern, lambda m: swaps[m.group()], body)

    def __repr__(self) -> str:
        return f"CurrencyEngine(locale={str(self._locale)!r}, currency_code={self._currency_code!r})"
