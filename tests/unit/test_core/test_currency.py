#!/usr/bin/env python3
"""Tests for currency parsing and formatting utilities."""

from decimal import Decimal

import pytest

from lunchreview.core.currency import format_amount, normalize_currency, parse_decimal


class TestParseDecimal:
    """Test API amount parsing."""

    @pytest.mark.currency
    @pytest.mark.parametrize(
        "value,expected",
        [
            ("12.3400", Decimal("12.34")),
            ("-0.5", Decimal("-0.5")),
            ("1,234.56", Decimal("1234.56")),
            (12.34, Decimal("12.34")),
            (7, Decimal("7")),
            (Decimal("1.5"), Decimal("1.5")),
        ],
    )
    def test_valid_values(self, value, expected):
        assert parse_decimal(value) == expected

    @pytest.mark.currency
    @pytest.mark.parametrize("value", [None, "", "abc", "NaN", "Infinity", True])
    def test_invalid_values(self, value):
        with pytest.raises(ValueError):
            parse_decimal(value)


class TestNormalizeCurrency:
    """Test currency code normalization."""

    @pytest.mark.currency
    def test_lowercases(self):
        assert normalize_currency(" CAD ") == "cad"

    @pytest.mark.currency
    @pytest.mark.parametrize("value", [None, ""])
    def test_default(self, value):
        assert normalize_currency(value) == "usd"


class TestFormatAmount:
    """Test amount formatting."""

    @pytest.mark.currency
    def test_rounds_half_up(self):
        assert format_amount(Decimal("0.125"), "usd") == "$0.13"

    @pytest.mark.currency
    def test_negative_sign_before_symbol(self):
        assert format_amount(Decimal("-1234.5"), "gbp") == "-£1,234.50"

    @pytest.mark.currency
    def test_unknown_currency_uses_code(self):
        assert format_amount(Decimal("3"), "nzd") == "3.00 NZD"
