"""Trip memo data model.

A trip memo is the billing record of a single trip. Raw fields are kept as
text exactly as they were entered on the memo form (or read back from the
sheet), so that an unparseable amount can be stored and later treated as 0
by the calculator instead of being rejected. Derived fields are rendered
text produced by :func:`transport_billing.calculators.recompute`.
"""

import datetime as dt
from enum import Enum
from typing import Any, List, Optional, Tuple

from pydantic import Field, model_validator

from transport_billing.models.base import BaseDataModel


class MemoStatus(str, Enum):
    """Billing status of a memo."""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"


def coerce_cells_to_text(data: Any) -> Any:
    """Turn sheet cell values (numbers, None) into the text the models store."""
    if not isinstance(data, dict):
        return data
    coerced = {}
    for key, value in data.items():
        if value is None:
            coerced[key] = ""
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            coerced[key] = str(value)
        else:
            coerced[key] = value
    return coerced


class TripMemo(BaseDataModel):
    """Represents one billable trip.

    Identity is the business-assigned memo number (``SVS-004``). A trip may
    consist of two independent shifts, each with its own clock times and
    odometer readings, and may combine up to two service items.

    Attributes:
        memo_no: Memo number, ``<PREFIX>-<NNN>``
        operated_date: First operating date (ISO date text)
        operated_upto_date: Last operating date for multi-day trips
        starting_time1 / closing_time1: Shift 1 clock times (``HH:MM``)
        starting_km1 / closing_km1: Shift 1 odometer readings
        service_item1 / service_item2: Selected service product items
        minimum_hours1/2, minimum_charges1/2: Minimums of each service item
        total_hours ... total_amount_in_words: Derived, never edited

    Example:
        >>> memo = new_memo("SVS-004", operated_date=dt.date(2024, 7, 28))
        >>> memo.fixed_amount_desc
        'Fixed Amount'
        >>> memo.status
        <MemoStatus.PENDING: 'PENDING'>
    """

    memo_no: str = ""
    operated_date: str = ""
    operated_upto_date: str = ""
    vehicle_no: str = ""
    vehicle_type: str = ""
    customer_name: str = ""
    customer_address1: str = ""
    customer_address2: str = ""

    # Shift windows
    starting_time1: str = ""
    closing_time1: str = ""
    starting_time2: str = ""
    closing_time2: str = ""
    starting_km1: str = "0"
    closing_km1: str = "0"
    starting_km2: str = "0"
    closing_km2: str = "0"

    # Service items and rates
    service_item1: str = ""
    minimum_hours1: str = "0"
    minimum_charges1: str = "0"
    service_item2: str = ""
    minimum_hours2: str = "0"
    minimum_charges2: str = "0"
    additional_hour_rate: str = "0"
    fixed_amount_desc: str = "Fixed Amount"
    fixed_amount: str = "0"
    km_rate: str = "0"
    discount_percentage: str = "0"
    driver_bata_rate: str = "0"
    toll_amount: str = "0"
    permit_amount: str = "0"
    night_halt_amount: str = "0"
    other_charges_desc: str = "Other Charges"
    other_charges_amount: str = "0"
    less_advance: str = "0"
    remark: str = ""

    # Derived
    total_hours: str = "0.00"
    driver_bata_qty: str = "0"
    total_km: str = "0"
    extra_hours: str = "0.00"
    additional_hour_amount: str = "0"
    km_amount: str = "0.00"
    driver_bata_amount: str = "0.00"
    discount_amount: str = "0.00"
    total_amount: str = "0.00"
    balance: str = "0.00"
    total_amount_in_words: str = ""

    status: MemoStatus = Field(default=MemoStatus.PENDING)

    @model_validator(mode="before")
    @classmethod
    def coerce_cells(cls, data: Any) -> Any:
        """Accept numeric or empty sheet cells for text fields."""
        return coerce_cells_to_text(data)

    @classmethod
    def column_names(cls) -> List[str]:
        """Column order used when a memo is written as a sheet row."""
        return list(cls.model_fields.keys())

    def to_row(self) -> List[str]:
        """Serialize the memo as a row of text cells in column order."""
        data = self.model_dump(mode="json")
        return [str(data[name]) for name in self.column_names()]


# Fields the memo form lets a user type into. Every one of them feeds the
# derived set, directly or through a lookup.
RAW_FIELDS: Tuple[str, ...] = (
    "memo_no",
    "operated_date",
    "operated_upto_date",
    "vehicle_no",
    "vehicle_type",
    "customer_name",
    "customer_address1",
    "customer_address2",
    "starting_time1",
    "closing_time1",
    "starting_time2",
    "closing_time2",
    "starting_km1",
    "closing_km1",
    "starting_km2",
    "closing_km2",
    "service_item1",
    "minimum_hours1",
    "minimum_charges1",
    "service_item2",
    "minimum_hours2",
    "minimum_charges2",
    "additional_hour_rate",
    "fixed_amount_desc",
    "fixed_amount",
    "km_rate",
    "discount_percentage",
    "driver_bata_rate",
    "toll_amount",
    "permit_amount",
    "night_halt_amount",
    "other_charges_desc",
    "other_charges_amount",
    "less_advance",
    "remark",
)

DERIVED_FIELDS: Tuple[str, ...] = (
    "total_hours",
    "driver_bata_qty",
    "total_km",
    "extra_hours",
    "additional_hour_amount",
    "km_amount",
    "driver_bata_amount",
    "discount_amount",
    "total_amount",
    "balance",
    "total_amount_in_words",
)


def new_memo(memo_no: str, operated_date: Optional[dt.date] = None) -> TripMemo:
    """Create a memo with defaulted raw fields.

    Args:
        memo_no: Freshly issued memo number
        operated_date: Operating date, defaults to today

    Returns:
        TripMemo in PENDING status with zero amounts
    """
    operated_date = operated_date or dt.date.today()
    return TripMemo(memo_no=memo_no, operated_date=operated_date.isoformat())
