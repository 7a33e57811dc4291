"""Tests for pricecompare/common/text_utils.py"""

from decimal import Decimal

import pytest

from pricecompare.common.text_utils import clean_text, parse_decimal


class TestCleanText:
    def test_collapses_whitespace(self):
        assert clean_text("  Milbona \n  Mlijeko\t1 l ") == "Milbona Mlijeko 1 l"

    def test_empty_and_none(self):
        assert clean_text("") == ""
        assert clean_text(None) == ""


class TestParseDecimal:
    @pytest.mark.parametrize("text, expected", [
        ("1,29", Decimal("1.29")),
        ("1.29 €", Decimal("1.29")),
        ("€ 0,99", Decimal("0.99")),
        ("1.299,00", Decimal("1299.00")),
        ("1,299.00", Decimal("1299.00")),
        ("1 299,00 €", Decimal("1299.00")),
        ("2.5", Decimal("2.5")),
        ("3", Decimal("3")),
    ])
    def test_separator_conventions(self, text, expected):
        assert parse_decimal(text) == expected

    def test_numbers_pass_through(self):
        assert parse_decimal(1.29) == Decimal("1.29")
        assert parse_decimal("1.19") == Decimal("1.19")

    def test_only_first_number_counts(self):
        assert parse_decimal("1,29 € 2,58 /kg") == Decimal("1.29")

    @pytest.mark.parametrize("text", [None, "", "abc", "0", "0,00", "-1,29"])
    def test_rejects_non_positive_or_missing(self, text):
        assert parse_decimal(text) is None
