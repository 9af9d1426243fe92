"""Trip charge calculator for memo billing.

This module turns the raw fields of a trip memo into its charges:
- Shift hours (two independent shifts, midnight crossing supported)
- Driver bata quantity (total hours rounded up)
- Kilometres run across both shifts
- Extra hours beyond the service minimums and their amount
- Kilometre amount, driver bata amount
- Discount on the discountable base only
- Total amount, balance after advance, total in words

All arithmetic is done on exact Decimals; values are only rounded when they
are rendered back into the memo. Any numeric field that does not parse
counts as 0.
"""

from dataclasses import dataclass
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from transport_billing.calculators.amount_in_words import rupees_in_words
from transport_billing.calculators.time_utils import (
    minutes_to_decimal_hours,
    shift_duration_minutes,
)
from transport_billing.models.memo import DERIVED_FIELDS, RAW_FIELDS, TripMemo

ZERO = Decimal("0")
HUNDRED = Decimal("100")


@dataclass
class TripCharges:
    """Complete charge breakdown of a single trip memo.

    Attributes:
        total_hours: Hours across both shifts, rounded to 2 places
        driver_bata_qty: Total hours rounded up to a whole number
        total_km: Kilometres across both shifts (may be negative)
        extra_hours: Hours beyond the minimum hours of both services
        additional_hour_amount: extra_hours × additional-hour rate
        km_amount: total_km × per-km rate
        driver_bata_amount: driver_bata_qty × driver bata rate
        subtotal: Every charge before discount
        discountable_amount: Minimum charges + extra hours + fixed + km
        discount_amount: discountable_amount × discount %
        total_amount: subtotal − discount_amount
        balance: total_amount − advance
        amount_in_words: Rounded total amount in words
    """

    total_hours: Decimal
    driver_bata_qty: int
    total_km: Decimal
    extra_hours: Decimal
    additional_hour_amount: Decimal
    km_amount: Decimal
    driver_bata_amount: Decimal
    subtotal: Decimal
    discountable_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal
    balance: Decimal
    amount_in_words: str


def parse_amount(value: Any) -> Decimal:
    """Parse a numeric form value leniently.

    Blank, malformed or non-finite values count as 0 and never raise.
    Thousands separators are ignored.

    Example:
        >>> parse_amount("1,250.50")
        Decimal('1250.50')
        >>> parse_amount("abc")
        Decimal('0')
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO

    text = str(value).replace(",", "").strip()
    if not text:
        return ZERO
    try:
        amount = Decimal(text)
    except InvalidOperation:
        return ZERO
    return amount if amount.is_finite() else ZERO


def calculate_trip_charges(memo: TripMemo) -> TripCharges:
    """Calculate the charge breakdown for a memo.

    Args:
        memo: Memo carrying the current raw field values

    Returns:
        TripCharges with exact (unrounded) amounts

    Example:
        >>> memo = TripMemo(
        ...     starting_time1="09:00",
        ...     closing_time1="15:30",
        ...     minimum_hours1="4",
        ...     minimum_charges1="1000",
        ...     additional_hour_rate="200",
        ... )
        >>> charges = calculate_trip_charges(memo)
        >>> charges.extra_hours
        Decimal('2.50')
        >>> charges.total_amount
        Decimal('1500.00')
    """
    p = parse_amount

    minutes = shift_duration_minutes(
        memo.starting_time1, memo.closing_time1
    ) + shift_duration_minutes(memo.starting_time2, memo.closing_time2)
    total_hours = minutes_to_decimal_hours(minutes)
    driver_bata_qty = int(total_hours.to_integral_value(rounding=ROUND_CEILING))

    # A closing reading below its starting reading is passed through as a
    # negative contribution.
    total_km = (p(memo.closing_km1) - p(memo.starting_km1)) + (
        p(memo.closing_km2) - p(memo.starting_km2)
    )

    extra_hours = max(
        ZERO, total_hours - p(memo.minimum_hours1) - p(memo.minimum_hours2)
    )
    additional_hour_amount = extra_hours * p(memo.additional_hour_rate)
    km_amount = total_km * p(memo.km_rate)
    driver_bata_amount = driver_bata_qty * p(memo.driver_bata_rate)

    minimum_charges = p(memo.minimum_charges1) + p(memo.minimum_charges2)
    fixed_amount = p(memo.fixed_amount)

    subtotal = (
        minimum_charges
        + additional_hour_amount
        + km_amount
        + driver_bata_amount
        + fixed_amount
        + p(memo.toll_amount)
        + p(memo.permit_amount)
        + p(memo.night_halt_amount)
        + p(memo.other_charges_amount)
    )

    # Driver bata, toll, permit, night halt and other charges are never
    # discounted.
    discountable_amount = (
        minimum_charges + additional_hour_amount + fixed_amount + km_amount
    )
    discount_amount = discountable_amount * (p(memo.discount_percentage) / HUNDRED)

    total_amount = subtotal - discount_amount
    balance = total_amount - p(memo.less_advance)

    return TripCharges(
        total_hours=total_hours,
        driver_bata_qty=driver_bata_qty,
        total_km=total_km,
        extra_hours=extra_hours,
        additional_hour_amount=additional_hour_amount,
        km_amount=km_amount,
        driver_bata_amount=driver_bata_amount,
        subtotal=subtotal,
        discountable_amount=discountable_amount,
        discount_amount=discount_amount,
        total_amount=total_amount,
        balance=balance,
        amount_in_words=rupees_in_words(total_amount),
    )


def format_fixed(value: Decimal, places: int = 2) -> str:
    """Render a Decimal with a fixed number of decimal places (half-up).

    Example:
        >>> format_fixed(Decimal("170"))
        '170.00'
        >>> format_fixed(Decimal("499.5"), 0)
        '500'
    """
    rounded = value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = abs(rounded)
    return f"{rounded:f}"


def format_plain(value: Decimal) -> str:
    """Render a Decimal without trailing zeros or exponent ("50", "12.5")."""
    if value.is_zero():
        return "0"
    return f"{value.normalize():f}"


def render_charges(charges: TripCharges) -> dict:
    """Render charges into the memo's derived text fields.

    Total hours, extra hours and money use 2 decimal places, except the
    extra-hour amount which is shown in whole rupees.
    """
    return {
        "total_hours": format_fixed(charges.total_hours),
        "driver_bata_qty": str(charges.driver_bata_qty),
        "total_km": format_plain(charges.total_km),
        "extra_hours": format_fixed(charges.extra_hours),
        "additional_hour_amount": format_fixed(charges.additional_hour_amount, 0),
        "km_amount": format_fixed(charges.km_amount),
        "driver_bata_amount": format_fixed(charges.driver_bata_amount),
        "discount_amount": format_fixed(charges.discount_amount),
        "total_amount": format_fixed(charges.total_amount),
        "balance": format_fixed(charges.balance),
        "total_amount_in_words": charges.amount_in_words,
    }


def recompute(memo: TripMemo) -> TripMemo:
    """Return a copy of the memo with every derived field recomputed.

    The full derived set is always recomputed together; recomputing an
    unchanged memo gives identical derived fields.

    Args:
        memo: Memo with current raw fields

    Returns:
        New TripMemo, the input is left untouched
    """
    return memo.model_copy(update=render_charges(calculate_trip_charges(memo)))


def apply_raw_changes(memo: TripMemo, **changes: Any) -> TripMemo:
    """Apply edits to raw fields and recompute the derived fields.

    This is the only edit path for a memo: derived fields cannot be set.

    Args:
        memo: Memo to edit
        **changes: Raw field values keyed by field name

    Returns:
        New, recomputed TripMemo

    Raises:
        ValueError: If a derived or unknown field is given
    """
    for name in changes:
        if name in DERIVED_FIELDS:
            raise ValueError(f"{name} is derived and cannot be edited")
        if name not in RAW_FIELDS:
            raise ValueError(f"Unknown memo field: {name}")

    data = memo.model_dump()
    data.update(changes)
    return recompute(TripMemo(**data))
