"""Time calculation utilities for trip shifts.

This module provides low-level utilities for shift time calculations:
- Parsing clock times typed on the memo form ("HH:MM")
- Converting time to minutes
- Calculating durations between times (with midnight crossing)
- Converting minutes to decimal hours

Shift times carry no date, so a closing time earlier than the starting time
is read as the next day.
"""

import datetime as dt
import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

_CLOCK_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*$")

MINUTES_PER_DAY = 24 * 60


def parse_clock_time(value: Optional[str]) -> Optional[dt.time]:
    """Parse a clock time as entered on the memo form.

    Args:
        value: Text such as "09:00", "9:05" or "22:30:00"

    Returns:
        The parsed time, or None when the value is blank or not a valid time

    Example:
        >>> parse_clock_time("09:30")
        datetime.time(9, 30)
        >>> parse_clock_time("") is None
        True
        >>> parse_clock_time("25:00") is None
        True
    """
    if not value:
        return None
    match = _CLOCK_PATTERN.match(value)
    if not match:
        return None
    hour, minute = int(match.group(1)), int(match.group(2))
    if hour > 23 or minute > 59:
        return None
    return dt.time(hour, minute)


def convert_time_to_minutes(time: dt.time) -> int:
    """Convert a dt.time object to minutes since midnight.

    Example:
        >>> convert_time_to_minutes(dt.time(9, 30))
        570
    """
    return time.hour * 60 + time.minute


def calculate_duration_minutes(start_time: dt.time, end_time: dt.time) -> int:
    """Calculate duration in minutes between two clock times.

    When the end time is earlier than the start time the shift is taken to
    cross midnight. Equal times give a zero-length shift.

    Example:
        >>> calculate_duration_minutes(dt.time(9, 0), dt.time(13, 0))
        240
        >>> calculate_duration_minutes(dt.time(22, 0), dt.time(2, 0))
        240
    """
    start_minutes = convert_time_to_minutes(start_time)
    end_minutes = convert_time_to_minutes(end_time)

    if end_minutes < start_minutes:
        end_minutes += MINUTES_PER_DAY

    return end_minutes - start_minutes


def shift_duration_minutes(start: Optional[str], end: Optional[str]) -> int:
    """Duration of one shift from its form values.

    A shift with a missing or unparseable boundary counts as 0 minutes.

    Args:
        start: Starting time text
        end: Closing time text

    Returns:
        Shift length in minutes
    """
    start_time = parse_clock_time(start)
    end_time = parse_clock_time(end)
    if start_time is None or end_time is None:
        return 0
    return calculate_duration_minutes(start_time, end_time)


def minutes_to_decimal_hours(minutes: int) -> Decimal:
    """Convert minutes to decimal hours with 2 decimal precision.

    Example:
        >>> minutes_to_decimal_hours(390)
        Decimal('6.50')
        >>> minutes_to_decimal_hours(10)
        Decimal('0.17')

    Note:
        Rounds to 2 decimal places using ROUND_HALF_UP.
    """
    hours = Decimal(minutes) / Decimal("60")
    return hours.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
