"""Calculator modules for memo billing."""

from transport_billing.calculators.amount_in_words import (
    amount_in_words,
    rupees_in_words,
)
from transport_billing.calculators.time_utils import (
    calculate_duration_minutes,
    convert_time_to_minutes,
    minutes_to_decimal_hours,
    parse_clock_time,
    shift_duration_minutes,
)
from transport_billing.calculators.trip_charge_calculator import (
    TripCharges,
    apply_raw_changes,
    calculate_trip_charges,
    format_fixed,
    format_plain,
    parse_amount,
    recompute,
)

__all__ = [
    # amount_in_words
    "amount_in_words",
    "rupees_in_words",
    # time_utils
    "calculate_duration_minutes",
    "convert_time_to_minutes",
    "minutes_to_decimal_hours",
    "parse_clock_time",
    "shift_duration_minutes",
    # trip_charge_calculator
    "TripCharges",
    "apply_raw_changes",
    "calculate_trip_charges",
    "format_fixed",
    "format_plain",
    "parse_amount",
    "recompute",
]
