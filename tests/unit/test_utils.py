"""
Unit tests for utils.py module.

Tests Decimal helpers, validation functions, rate conversions, dates and
formatting utilities.
"""

from datetime import date
from decimal import Decimal

import pytest

from retireplan.exceptions import InvalidInputError
from retireplan.utils import (
    age_on,
    annual_percent_to_monthly,
    check_non_negative,
    check_positive_int,
    format_currency,
    format_percent,
    round_currency,
    to_decimal,
)


class TestToDecimal:
    """Test numeric coercion."""

    def test_float_via_str(self):
        """Floats keep their shortest decimal representation."""
        assert to_decimal(7.1) == Decimal("7.1")

    def test_passthrough_and_parse(self):
        assert to_decimal(Decimal("1.50")) == Decimal("1.50")
        assert to_decimal(3) == Decimal(3)
        assert to_decimal("106965.67") == Decimal("106965.67")

    @pytest.mark.parametrize("value", ["abc", True, None, [1], "NaN", float("inf")])
    def test_rejects(self, value):
        with pytest.raises(InvalidInputError, match="amount"):
            to_decimal(value, name="amount")


class TestRounding:
    """Test round_currency."""

    def test_half_up(self):
        assert round_currency(Decimal("2.345")) == Decimal("2.35")
        assert round_currency(Decimal("2.344")) == Decimal("2.34")
        assert round_currency(Decimal("0.005")) == Decimal("0.01")

    def test_two_places(self):
        assert str(round_currency(Decimal("10"))) == "10.00"


class TestValidation:
    """Test input validation functions."""

    def test_check_non_negative_valid(self):
        check_non_negative("test", Decimal("0"))
        check_non_negative("test", Decimal("1.5"))

    def test_check_non_negative_invalid(self):
        with pytest.raises(InvalidInputError, match="test must be non-negative"):
            check_non_negative("test", Decimal("-0.01"))

    def test_check_positive_int(self):
        check_positive_int("age", 1)
        with pytest.raises(InvalidInputError, match="age must be positive"):
            check_positive_int("age", 0)
        with pytest.raises(InvalidInputError, match="age must be an integer"):
            check_positive_int("age", True)


class TestRateConversion:
    """Test annual percentage → monthly rate."""

    def test_zero(self):
        assert annual_percent_to_monthly(Decimal("0")) == 0

    def test_seven_percent(self):
        """7% / 1200, held at ten decimal places."""
        assert annual_percent_to_monthly(Decimal("7.0")) == Decimal("0.0058333333")

    def test_twelve_percent(self):
        assert annual_percent_to_monthly(Decimal("12")) == Decimal("0.0100000000")


class TestAgeOn:
    """Test age_on."""

    def test_year_difference(self):
        assert age_on(date(1983, 5, 15), date(2025, 1, 1)) == 42
        assert age_on(date(1983, 5, 15), date(2025, 12, 31)) == 42

    def test_unknown(self):
        assert age_on(None, date(2025, 1, 1)) is None


class TestFormatting:
    """Test reporting helpers."""

    def test_format_currency(self):
        assert format_currency(Decimal("6200")) == "$6,200.00"
        assert format_currency(Decimal("1197836.456")) == "$1,197,836.46"
        assert format_currency(Decimal("10"), symbol="€") == "€10.00"

    def test_format_currency_none(self):
        assert format_currency(None) == "N/A"

    def test_format_percent(self):
        assert format_percent(80) == "80%"
