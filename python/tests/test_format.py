"""Tests for the one-shot format_amount helper and package exports."""
from __future__ import annotations

import plusminus
from plusminus.format import format_amount

NBSP = "\u00a0"
MINUS = "\u2212"


class TestFormatAmount:
    def test_usd(self):
        assert format_amount(150, "USD", "en_US") == "+$150.00"
        assert format_amount(-150, "USD", "en_US") == f"{MINUS}$150.00"

    def test_zero(self):
        assert format_amount(0, "EUR", "nl_NL") == f"€{NBSP}0,00"

    def test_custom_signs(self):
        assert format_amount(1, "USD", "en_US", positive_sign="▲") == "▲$1.00"
        assert format_amount(-1, "USD", "en_US", negative_sign="-") == "-$1.00"

    def test_symbol_and_options(self):
        text = format_amount(
            -1234, "USD", "en_US",
            currency_symbol="US$",
            maximum_fraction_digits=0,
            minimum_fraction_digits=0,
        )
        assert text == f"{MINUS}US$1,234"

    def test_env_locale(self, monkeypatch):
        monkeypatch.setenv("PLUSMINUS_LOCALE", "ru_RU")
        assert format_amount(-1) == f"{MINUS}1,00{NBSP}₽"

    def test_unrenderable(self, capsys):
        assert format_amount("n/a", "USD", "en_US") is None
        assert "PLUSMINUS_RENDER_WARN" in capsys.readouterr().err


class TestExports:
    def test_all_exports(self):
        for name in plusminus.__all__:
            assert hasattr(plusminus, name), f"Missing export: {name}"
