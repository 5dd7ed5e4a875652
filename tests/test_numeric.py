"""Tests for numeric parsing and formatting."""

import pytest
from decimal import Decimal

from goldbook.utils.numeric import (
    parse_numeric_value,
    format_numeric_value,
    round_for_storage,
)


class TestParseNumericValue:
    """Tests for parse_numeric_value."""

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_missing_values_use_default(self, value):
        """Test that missing input returns the default."""
        assert parse_numeric_value(value) == Decimal("0")
        assert parse_numeric_value(value, 5) == Decimal("5")

    def test_numbers_pass_through(self):
        """Test that finite numbers are returned unchanged."""
        assert parse_numeric_value(42) == Decimal("42")
        assert parse_numeric_value(Decimal("1.25")) == Decimal("1.25")
        assert parse_numeric_value(3.5) == Decimal("3.5")
        assert parse_numeric_value(-7.25) == Decimal("-7.25")

    def test_numeric_strings(self):
        """Test parsing of well-formed numeric strings."""
        assert parse_numeric_value("12.5") == Decimal("12.5")
        assert parse_numeric_value(" -3 ") == Decimal("-3")
        assert parse_numeric_value("1e3") == Decimal("1000")

    def test_partial_numeric_prefix_is_rejected(self):
        """Test that a number followed by garbage falls back to the default."""
        assert parse_numeric_value("3.5abc") == Decimal("0")
        assert parse_numeric_value("3.5abc", 1) == Decimal("1")

    @pytest.mark.parametrize("value", ["abc", "NaN", "inf", "-Infinity", float("nan"), float("inf")])
    def test_non_finite_and_garbage_use_default(self, value):
        """Test that garbage and non-finite values never raise."""
        assert parse_numeric_value(value) == Decimal("0")

    @pytest.mark.parametrize("value", [True, False, [], {}, object()])
    def test_unsupported_types_use_default(self, value):
        """Test that booleans and other types fall back to the default."""
        assert parse_numeric_value(value, 2) == Decimal("2")

    def test_returns_decimal(self):
        """Test that the result is always a Decimal."""
        assert isinstance(parse_numeric_value("1"), Decimal)
        assert isinstance(parse_numeric_value(None), Decimal)


class TestFormatNumericValue:
    """Tests for format_numeric_value."""

    def test_none_with_three_decimals(self):
        """Test formatting None with three decimals."""
        assert format_numeric_value(None, 3) == "0.000"

    def test_default_two_decimals(self):
        """Test default formatting and rounding."""
        assert format_numeric_value("107.567567") == "107.57"
        assert format_numeric_value(49.5) == "49.50"
        assert format_numeric_value(2.675) == "2.68"

    def test_negative_sign_kept(self):
        """Test that negative values keep their sign."""
        assert format_numeric_value("-12.345") == "-12.35"
        assert format_numeric_value(-0.5, 0) == "-1"

    def test_negative_zero_unsigned(self):
        """Test that values rounding to zero are shown without a sign."""
        assert format_numeric_value("-0.001") == "0.00"

    def test_malformed_input_uses_default(self):
        """Test that malformed input is formatted from the default."""
        assert format_numeric_value("oops") == "0.00"
        assert format_numeric_value("oops", 1, 7) == "7.0"

    def test_zero_decimals(self):
        """Test formatting without decimals."""
        assert format_numeric_value("12.5", 0) == "13"

    def test_large_values_do_not_raise(self):
        """Test that values beyond the default precision still format."""
        assert format_numeric_value("1e30") == "1000000000000000000000000000000.00"


class TestRoundForStorage:
    """Tests for round_for_storage."""

    def test_rounds_half_up(self):
        """Test rounding to two decimals."""
        assert round_for_storage(Decimal("107.567567")) == Decimal("107.57")
        assert round_for_storage(Decimal("0.125")) == Decimal("0.13")
        assert round_for_storage("49.5") == Decimal("49.50")

    def test_negative_values(self):
        """Test rounding of negative values."""
        assert round_for_storage(Decimal("-60.004")) == Decimal("-60.00")


class TestNumericRange:
    """Tests for values outside float range and non-plain notation."""

    @pytest.mark.parametrize("value", ["1e999999", "-1e400", Decimal("1e309"), 10**400])
    def test_too_large_uses_default(self, value):
        """Test that magnitudes a float cannot hold fall back to the default."""
        assert parse_numeric_value(value) == Decimal("0")
        assert parse_numeric_value(value, 3) == Decimal("3")

    def test_float_range_edge_is_kept(self):
        """Test that large values within float range are kept."""
        assert parse_numeric_value("1.5e308") == Decimal("1.5e308")

    def test_too_small_becomes_zero(self):
        """Test that values below float range read as zero, not the default."""
        assert parse_numeric_value("1e-999999", 5) == Decimal("0")

    def test_huge_exponent_zero(self):
        """Test that a zero with a huge exponent is plain zero."""
        assert parse_numeric_value("0e999999") == Decimal("0")

    @pytest.mark.parametrize("value", ["1e999999", "1e1000000"])
    def test_format_too_large(self, value):
        """Test that formatting out-of-range input neither raises nor explodes."""
        assert format_numeric_value(value) == "0.00"

    @pytest.mark.parametrize("value", ["1_000", "١٢", "１２", "0x10", "1,000"])
    def test_non_plain_notation_uses_default(self, value):
        """Test that separators and non-ASCII digits are rejected like "3.5abc"."""
        assert parse_numeric_value(value) == Decimal("0")

    def test_plain_notation_variants(self):
        """Test the accepted forms."""
        assert parse_numeric_value("+4") == Decimal("4")
        assert parse_numeric_value(".5") == Decimal("0.5")
        assert parse_numeric_value("5.") == Decimal("5")
        assert parse_numeric_value("2E-2") == Decimal("0.02")
        assert parse_numeric_value(1e-05) == Decimal("0.00001")
