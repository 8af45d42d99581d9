"""One-shot signed currency formatting.

Builds a throwaway PositiveCurrencyFormatter per call. Keep a formatter
around instead when formatting many amounts with the same configuration.
"""
from __future__ import annotations

from typing import Any

from .formatter import PositiveCurrencyFormatter
from .types import MINUS_SIGN, PLUS_SIGN


def format_amount(
    amount: Any,
    currency_code: str | None = None,
    locale: str | None = None,
    *,
    currency_symbol: str | None = None,
    positive_sign: str = PLUS_SIGN,
    negative_sign: str = MINUS_SIGN,
    **options: Any,
) -> str | None:
    """Format amount as a signed currency string.

    Rules:
    1. Amounts above zero get positive_sign where the locale puts its minus
    2. Amounts below zero get negative_sign (U+2212 by default, never a hyphen)
    3. Zero, including negative zero, gets no sign
    4. Everything else (symbol, separators, spacing, bidi marks) is the locale's

    Returns None if the amount cannot be rendered.
    """
    formatter = PositiveCurrencyFormatter(
        locale, currency_code, currency_symbol, options=options
    )
    formatter.positive_sign = positive_sign
    formatter.negative_sign = negative_sign
    return formatter.format(amount)
