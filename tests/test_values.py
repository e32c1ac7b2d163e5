"""Tests for the values module - unit-aware parsing of catalog attribute strings."""

import pytest

from partxref_mcp.values import (
    si_multiplier,
    extract_numeric_value,
    leading_number,
    parse_tolerance,
    parse_msl,
    parse_range,
    parse_flag,
    normalize,
)


# =============================================================================
# NUMERIC PARSERS
# =============================================================================


class TestSiMultiplier:
    """Tests for si_multiplier function."""

    def test_prefixes(self):
        assert si_multiplier("pF") == 1e-12
        assert si_multiplier("nF") == 1e-9
        assert si_multiplier("µF") == 1e-6
        assert si_multiplier("μH") == 1e-6
        assert si_multiplier("uF") == 1e-6
        assert si_multiplier("mA") == 1e-3
        assert si_multiplier("kΩ") == 1e3
        assert si_multiplier("MHz") == 1e6
        assert si_multiplier("GHz") == 1e9

    def test_no_prefix(self):
        assert si_multiplier("V") == 1.0
        assert si_multiplier("") == 1.0
        assert si_multiplier(None) == 1.0

    def test_lengths_and_ratios_are_not_scaled(self):
        """'mm' starts with m but is not milli; percent and ppm are unitless."""
        assert si_multiplier("mm") == 1.0
        assert si_multiplier("mil") == 1.0
        assert si_multiplier("%") == 1.0
        assert si_multiplier("ppm/°C") == 1.0
        assert si_multiplier("°C") == 1.0


class TestExtractNumericValue:
    """Tests for extract_numeric_value function."""

    def test_capacitance(self):
        value, unit = extract_numeric_value("100pF")
        assert value == pytest.approx(1e-10)
        assert unit == "pF"

        value, unit = extract_numeric_value("4.7µF")
        assert value == pytest.approx(4.7e-6)
        assert unit == "µF"

    def test_with_space_before_unit(self):
        value, unit = extract_numeric_value("0.1 µF")
        assert value == pytest.approx(1e-7)
        assert unit == "µF"

    def test_resistance(self):
        value, unit = extract_numeric_value("10kΩ")
        assert value == pytest.approx(10000)
        assert unit == "kΩ"

    def test_length_stays_in_millimetres(self):
        value, unit = extract_numeric_value("0.90mm")
        assert value == pytest.approx(0.90)
        assert unit == "mm"

    def test_bare_number(self):
        assert extract_numeric_value("25") == (25.0, None)

    def test_negative_and_comparators(self):
        assert extract_numeric_value("-55°C")[0] == -55.0
        assert extract_numeric_value("≤ 2.5V")[0] == 2.5

    def test_reads_leading_figure_only(self):
        value, unit = extract_numeric_value('0.197" Dia (5.00mm)')
        assert value == pytest.approx(0.197)
        assert unit == '"'

    def test_non_numeric(self):
        assert extract_numeric_value("X7R") == (None, None)
        assert extract_numeric_value("") == (None, None)
        assert extract_numeric_value(None) == (None, None)
        assert extract_numeric_value("abc") == (None, None)


class TestLeadingNumber:
    """Tests for leading_number function."""

    def test_finds_number_anywhere(self):
        assert leading_number("MSL 3") == 3.0
        assert leading_number("≥ 150°C") == 150.0

    def test_not_scaled(self):
        assert leading_number("10kΩ") == 10.0

    def test_invalid(self):
        assert leading_number("") is None
        assert leading_number(None) is None
        assert leading_number("Unlimited") is None


class TestParseTolerance:
    """Tests for parse_tolerance function."""

    def test_with_plus_minus(self):
        assert parse_tolerance("±1%") == 1.0
        assert parse_tolerance("±10%") == 10.0
        assert parse_tolerance("± 0.5%") == 0.5

    def test_without_plus_minus(self):
        assert parse_tolerance("5%") == 5.0

    def test_requires_percent(self):
        assert parse_tolerance("K") is None
        assert parse_tolerance("10") is None
        assert parse_tolerance("") is None
        assert parse_tolerance(None) is None


class TestParseMsl:
    """Tests for parse_msl function."""

    def test_levels(self):
        assert parse_msl("MSL 3") == 3
        assert parse_msl("1 (Unlimited)") == 1
        assert parse_msl("3 (168 Hours)") == 3

    def test_invalid(self):
        assert parse_msl("Not Applicable") is None
        assert parse_msl("") is None
        assert parse_msl(None) is None


class TestParseRange:
    """Tests for parse_range function."""

    def test_temperature_range(self):
        assert parse_range("-55°C ~ 125°C") == (-55.0, 125.0)
        assert parse_range("-40°C ~ 85°C") == (-40.0, 85.0)

    def test_to_separator(self):
        assert parse_range("0.8V to 5.5V") == pytest.approx((0.8, 5.5))

    def test_bounds_returned_low_first(self):
        assert parse_range("-0.5V to -6V") == pytest.approx((-6.0, -0.5))

    def test_lower_bound_inherits_unit(self):
        low, high = parse_range("2 ~ 6.5mA")
        assert low == pytest.approx(0.002)
        assert high == pytest.approx(0.0065)

    def test_single_value_is_degenerate_range(self):
        assert parse_range("25V") == (25.0, 25.0)
        assert parse_range("3.3V") == pytest.approx((3.3, 3.3))

    def test_invalid(self):
        assert parse_range("") is None
        assert parse_range("   ") is None
        assert parse_range(None) is None
        assert parse_range("Adjustable") is None
        assert parse_range("1V ~ abc") is None
        assert parse_range("1 ~ 2 ~ 3") is None


# =============================================================================
# TEXT HELPERS
# =============================================================================


class TestParseFlag:
    """Tests for parse_flag function."""

    def test_truthy(self):
        assert parse_flag("Yes") is True
        assert parse_flag("true") is True
        assert parse_flag("1") is True
        assert parse_flag(" Required ") is True

    def test_falsy(self):
        assert parse_flag("No") is False
        assert parse_flag("-") is False
        assert parse_flag("") is False
        assert parse_flag(None) is False


class TestNormalize:
    """Tests for normalize function."""

    def test_uppercases_and_trims(self):
        assert normalize("  x7r ") == "X7R"

    def test_collapses_whitespace(self):
        assert normalize("0603  (1608\tMetric)") == "0603 (1608 METRIC)"
