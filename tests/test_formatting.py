"""Tests for currency and number formatting."""

import math

import pytest

from bizdoc.errors import FormatError
from bizdoc.formatting import (
    format_currency, format_money, format_optional_currency, format_quantity,
    parse_formatted_number,
)


class TestFormatCurrency:
    def test_zero(self):
        assert format_currency(0) == "0.00"

    def test_grouping_and_padding(self):
        assert format_currency(1234567.8) == "1,234,567.80"

    def test_negative(self):
        assert format_currency(-5) == "-5.00"

    def test_rounds_to_two_decimals(self):
        assert format_currency(0.005) in ("0.01", "0.00")
        assert format_currency(19.999) == "20.00"

    def test_negative_zero_is_plain_zero(self):
        assert format_currency(-0.001) == "0.00"

    @pytest.mark.parametrize("value", [0.1, 7, 999.999, 1e9, -42.42, 3.14159])
    def test_always_two_decimals(self, value):
        text = format_currency(value)
        assert len(text.split(".")[1]) == 2

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_raises_format_error(self, value):
        with pytest.raises(FormatError):
            format_currency(value)

    def test_format_error_is_value_error(self):
        with pytest.raises(ValueError):
            format_currency(float("nan"))


class TestOptionalValues:
    def test_blank_stays_blank(self):
        assert format_optional_currency(None) == ""
        assert format_optional_currency("") == ""

    def test_zero_is_not_blank(self):
        assert format_optional_currency(0) == "0.00"

    def test_money_prefix(self):
        assert format_money(30000) == "KES 30,000.00"
        assert format_money(12.5, "USD") == "USD 12.50"
        assert format_money(12.5, "") == "12.50"

    def test_quantity(self):
        assert format_quantity(2.0) == "2"
        assert format_quantity(2.5) == "2.5"
        assert format_quantity(None) == ""


class TestParseFormattedNumber:
    def test_strips_commas(self):
        assert parse_formatted_number("1,234.50") == 1234.5

    def test_blank_and_junk(self):
        assert parse_formatted_number("") == 0.0
        assert parse_formatted_number(None) == 0.0
        assert parse_formatted_number("abc") == 0.0
        assert parse_formatted_number("nan") == 0.0
