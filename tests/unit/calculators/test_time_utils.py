"""Unit tests for shift time utilities."""

import datetime as dt
from decimal import Decimal

import pytest

from transport_billing.calculators.time_utils import (
    calculate_duration_minutes,
    convert_time_to_minutes,
    minutes_to_decimal_hours,
    parse_clock_time,
    shift_duration_minutes,
)


class TestParseClockTime:
    """Test parse_clock_time function."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("09:00", dt.time(9, 0)),
            ("9:05", dt.time(9, 5)),
            (" 22:30 ", dt.time(22, 30)),
            ("22:30:45", dt.time(22, 30)),
        ],
    )
    def test_valid_times(self, value, expected):
        """Test valid clock times are parsed."""
        assert parse_clock_time(value) == expected

    @pytest.mark.parametrize("value", [None, "", "25:00", "12:60", "noon", "1230"])
    def test_invalid_times(self, value):
        """Test blank or malformed times return None."""
        assert parse_clock_time(value) is None


class TestDurations:
    """Test duration calculations."""

    def test_convert_time_to_minutes(self):
        """Test minutes since midnight."""
        assert convert_time_to_minutes(dt.time(9, 30)) == 570

    def test_same_day_duration(self):
        """Test a shift within one day."""
        assert calculate_duration_minutes(dt.time(9, 0), dt.time(13, 0)) == 240

    def test_midnight_crossing(self):
        """Test a closing time before the starting time crosses midnight."""
        assert calculate_duration_minutes(dt.time(22, 0), dt.time(2, 0)) == 240

    def test_equal_times(self):
        """Test equal times give a zero-length shift."""
        assert calculate_duration_minutes(dt.time(8, 0), dt.time(8, 0)) == 0

    def test_shift_duration_from_text(self):
        """Test shift duration from form values."""
        assert shift_duration_minutes("09:00", "13:00") == 240
        assert shift_duration_minutes("22:00", "02:00") == 240

    @pytest.mark.parametrize(
        "start,end", [("", "13:00"), ("09:00", ""), ("", ""), ("xx", "13:00")]
    )
    def test_shift_with_missing_boundary(self, start, end):
        """Test a shift with a missing or bad boundary counts as 0."""
        assert shift_duration_minutes(start, end) == 0


class TestMinutesToDecimalHours:
    """Test minutes_to_decimal_hours function."""

    @pytest.mark.parametrize(
        "minutes,expected",
        [(240, "4.00"), (390, "6.50"), (10, "0.17"), (0, "0.00")],
    )
    def test_conversion(self, minutes, expected):
        """Test conversion rounds to 2 places half-up."""
        assert minutes_to_decimal_hours(minutes) == Decimal(expected)
