"""Tests for display formatting helpers."""

from decimal import Decimal

import pytest

from orbit.analytics.formatting import format_currency, format_percentage, format_ratio


class TestFormatCurrency:
    """AED amounts with thousands separators and two decimals."""

    @pytest.mark.parametrize(
        "amount, expected",
        [
            (0, "AED 0.00"),
            (None, "AED 0.00"),
            (5, "AED 5.00"),
            (1234.5, "AED 1,234.50"),
            (Decimal("1750.50"), "AED 1,750.50"),
            (Decimal("1234567.891"), "AED 1,234,567.89"),
            (Decimal("0.125"), "AED 0.13"),
            (0.125, "AED 0.13"),
            (Decimal("2.675"), "AED 2.68"),
            (Decimal("-0.125"), "AED -0.13"),
        ],
    )
    def test_formats(self, amount, expected):
        assert format_currency(amount) == expected


class TestFormatPercentage:
    def test_zero_denominator(self):
        """No leads means 0.00%, never a division error."""
        assert format_percentage(0, 0) == "0.00%"
        assert format_percentage(5, 0) == "0.00%"

    def test_quarter(self):
        assert format_percentage(1, 4) == "25.00%"

    def test_rounds_to_two_places(self):
        assert format_percentage(1, 3) == "33.33%"


class TestFormatRatio:
    def test_zero_denominator(self):
        assert format_ratio(7, 0) == "0.00"

    def test_ratio(self):
        assert format_ratio(6, 4) == "1.50"


def test_currency_rounds_halves_away_from_zero():
    """An exact half cent rounds up, not to even."""
    assert format_currency(Decimal("1000.005")) == "AED 1,000.01"
    assert format_currency(Decimal("0.135")) == "AED 0.14"
