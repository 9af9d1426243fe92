"""Validation of trip memos before they are saved.

Memo fields are free text, and the calculator already treats anything it
cannot parse as 0. Validation therefore blocks only what makes a memo
unstorable (a missing memo number) and reports everything else as advisory
warnings and info messages shown next to a successful save.
"""

import datetime as dt
from decimal import Decimal, InvalidOperation
from typing import Optional

from transport_billing.calculators.time_utils import parse_clock_time
from transport_billing.calculators.trip_charge_calculator import parse_amount
from transport_billing.models.memo import TripMemo
from transport_billing.validators.validation_report import ValidationReport

NUMERIC_FIELDS = (
    "starting_km1",
    "closing_km1",
    "starting_km2",
    "closing_km2",
    "minimum_hours1",
    "minimum_charges1",
    "minimum_hours2",
    "minimum_charges2",
    "additional_hour_rate",
    "fixed_amount",
    "km_rate",
    "discount_percentage",
    "driver_bata_rate",
    "toll_amount",
    "permit_amount",
    "night_halt_amount",
    "other_charges_amount",
    "less_advance",
)


class MemoFieldValidators:
    """Field-level checks on memo text values."""

    @staticmethod
    def validate_number(value: str, field_name: str, report: ValidationReport) -> None:
        """Warn when a non-blank value is not a number (it counts as 0)."""
        text = (value or "").replace(",", "").strip()
        if not text:
            return
        try:
            number = Decimal(text)
        except InvalidOperation:
            number = None
        if number is None or not number.is_finite():
            report.add_warning(field_name, "Not a number, counted as 0", value)

    @staticmethod
    def validate_clock_time(
        value: str, field_name: str, report: ValidationReport
    ) -> Optional[dt.time]:
        """Warn when a non-blank time is not HH:MM; return the parsed time."""
        if not value or not value.strip():
            return None
        parsed = parse_clock_time(value)
        if parsed is None:
            report.add_warning(
                field_name, "Not a valid time (HH:MM), shift counted as 0 hours", value
            )
        return parsed

    @staticmethod
    def validate_date(value: str, field_name: str, report: ValidationReport) -> None:
        """Warn when a non-blank date is not an ISO date."""
        if not value or not value.strip():
            return
        try:
            dt.date.fromisoformat(value.strip())
        except ValueError:
            report.add_warning(field_name, "Not a valid date (YYYY-MM-DD)", value)


class MemoValidator:
    """
    Validates a trip memo.

    Example:
        >>> report = MemoValidator().validate(memo)
        >>> if not report.is_valid():
        ...     print(report.format())
    """

    def validate(self, memo: TripMemo) -> ValidationReport:
        report = ValidationReport()

        if not memo.memo_no.strip():
            report.add_error("memo_no", "Memo number is required", memo.memo_no)
        if not memo.customer_name.strip():
            report.add_warning(
                "customer_name", "No customer selected", memo.customer_name
            )

        MemoFieldValidators.validate_date(
            memo.operated_date, "operated_date", report
        )
        MemoFieldValidators.validate_date(
            memo.operated_upto_date, "operated_upto_date", report
        )

        for field_name in NUMERIC_FIELDS:
            MemoFieldValidators.validate_number(
                getattr(memo, field_name), field_name, report
            )

        for shift in (1, 2):
            self._validate_shift(memo, shift, report)

        self._validate_kilometres(memo, report)

        if memo.memo_no.strip():
            for issue in report.issues:
                issue.context = {"memo_no": memo.memo_no}

        return report

    def _validate_shift(
        self, memo: TripMemo, shift: int, report: ValidationReport
    ) -> None:
        start_field, end_field = f"starting_time{shift}", f"closing_time{shift}"
        start_value = getattr(memo, start_field)
        end_value = getattr(memo, end_field)

        validate_time = MemoFieldValidators.validate_clock_time
        start = validate_time(start_value, start_field, report)
        end = validate_time(end_value, end_field, report)

        if bool(start_value.strip()) != bool(end_value.strip()):
            missing = end_field if start_value.strip() else start_field
            report.add_warning(
                missing, f"Shift {shift} has only one time, counted as 0 hours", ""
            )

        if start is not None and end is not None and end < start:
            report.add_info(
                end_field,
                f"Shift {shift} closes before it starts, read as crossing midnight",
                end_value,
            )

    def _validate_kilometres(self, memo: TripMemo, report: ValidationReport) -> None:
        p = parse_amount
        total_km = (p(memo.closing_km1) - p(memo.starting_km1)) + (
            p(memo.closing_km2) - p(memo.starting_km2)
        )
        if total_km < 0:
            report.add_warning(
                "total_km",
                "Closing readings are below starting readings, "
                "total kilometres is negative",
                str(total_km),
            )


def validate_memo(memo: TripMemo) -> ValidationReport:
    """Validate a memo with the default validator."""
    return MemoValidator().validate(memo)
