"""
Tests for monetary value normalization
"""

import pytest

from statement_recon.config import AmountsConfig
from statement_recon.parsers.amount import (
    AmountNormalizer,
    format_amount,
    normalize_amount,
)


class TestNormalizeAmount:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("1.234,56", 1234.56),
            ("1234,56", 1234.56),
            ("1234.56", 1234.56),
            ("50", 50.0),
            ("12.345.678,90", 12345678.90),
            ("0,5", 0.5),
        ],
    )
    def test_separator_conventions(self, raw, expected):
        assert normalize_amount(raw) == pytest.approx(expected)

    @pytest.mark.parametrize("raw", ["", "   ", "abc", "EUR", "€", "-", ",", None])
    def test_not_a_number(self, raw):
        assert normalize_amount(raw) is None

    def test_currency_markers_and_whitespace_removed(self):
        assert normalize_amount("1.234,56 EUR") == pytest.approx(1234.56)
        assert normalize_amount("€ 12,50") == pytest.approx(12.5)
        assert normalize_amount("  1 234,56  ") == pytest.approx(1234.56)

    def test_sign_is_preserved(self):
        assert normalize_amount("-45,00") == pytest.approx(-45.0)
        assert normalize_amount("- 45,00 €") == pytest.approx(-45.0)
        assert normalize_amount("+3,10") == pytest.approx(3.1)

    def test_zero_is_a_number(self):
        assert normalize_amount("0,00") == 0.0

    def test_trailing_text_after_number_is_ignored(self):
        assert normalize_amount("12abc") == pytest.approx(12.0)
        assert normalize_amount("99,90 (ref)") == pytest.approx(99.9)

    def test_non_finite_values_rejected(self):
        assert normalize_amount("Infinity") is None
        assert normalize_amount("1e999") is None

    def test_multiple_commas_only_first_becomes_decimal(self):
        # Outside the documented convention; keeps the leading valid number
        assert normalize_amount("1,2,3") == pytest.approx(1.2)

    def test_us_grouping_misread_under_comma_convention(self):
        assert normalize_amount("1,234.56") == pytest.approx(1.23456)

    @pytest.mark.parametrize(
        "amount", [0.01, 0.5, 7.0, 12.3, 999.99, 1234.56, 100000.0, 9876543.21]
    )
    def test_comma_decimal_round_trip(self, amount):
        plain = f"{amount:.2f}".replace(".", ",")
        grouped = f"{amount:,.2f}".replace(",", " ").replace(".", ",").replace(" ", ".")

        assert abs(normalize_amount(plain) - amount) < 1e-9
        assert abs(normalize_amount(grouped) - amount) < 1e-9


class TestAmountNormalizer:

    def test_period_convention(self):
        normalizer = AmountNormalizer(AmountsConfig(decimal_convention="period"))

        assert normalizer.normalize("1,234.56") == pytest.approx(1234.56)
        assert normalizer.normalize("1234.56") == pytest.approx(1234.56)
        assert normalizer.normalize("1,234") == pytest.approx(1234.0)

    def test_custom_currency_markers(self):
        normalizer = AmountNormalizer(AmountsConfig(currency_markers=["USD", "$"]))

        assert normalizer.normalize("$ 12,50") == pytest.approx(12.5)
        assert normalizer.normalize("40,00 USD") == pytest.approx(40.0)
        # EUR is no longer stripped, so nothing numeric leads the string
        assert normalizer.normalize("EUR 40,00") is None

    def test_markers_containing_regex_characters(self):
        normalizer = AmountNormalizer(AmountsConfig(currency_markers=["R$", "(EUR)"]))

        assert normalizer.normalize("R$ 10") == pytest.approx(10.0)
        assert normalizer.normalize("10,25 (EUR)") == pytest.approx(10.25)


class TestFormatAmount:

    def test_two_decimals(self):
        assert format_amount(2.5) == "2.50"
        assert format_amount(50) == "50.00"
        assert format_amount(1234.567) == "1234.57"
        assert format_amount(-120.0) == "-120.00"
