"""Memo entry workflow.

Drives a memo from a fresh number to a saved row: customer and service
selection fill dependent fields, every raw edit recomputes the derived
fields, and validation runs before the memo reaches the store.
"""

import datetime as dt
import logging
from dataclasses import dataclass
from typing import Any, Optional

from transport_billing.calculators.trip_charge_calculator import (
    apply_raw_changes,
    recompute,
)
from transport_billing.catalog.service_catalog import apply_service, find_offering
from transport_billing.models.memo import TripMemo, new_memo
from transport_billing.stores.database import Database
from transport_billing.stores.record_store import RecordNotFoundError
from transport_billing.utils.logging_utils import LogContext, log_function_call
from transport_billing.validators.memo_validator import validate_memo
from transport_billing.validators.validation_report import ValidationReport

logger = logging.getLogger(__name__)


@dataclass
class MemoSaveResult:
    """Outcome of a save attempt.

    Attributes:
        memo: The memo as recomputed for saving
        report: Validation report of the memo
        message: Store confirmation, None when validation blocked the save
    """

    memo: TripMemo
    report: ValidationReport
    message: Optional[str] = None

    @property
    def saved(self) -> bool:
        return self.message is not None


class MemoWorkflow:
    """
    Create, edit, save and delete trip memos.

    Example:
        >>> workflow = MemoWorkflow(database)
        >>> memo = workflow.start_memo()
        >>> memo = workflow.select_customer(memo, "John Doe")
        >>> memo = workflow.edit(memo, starting_time1="09:00", closing_time1="13:00")
        >>> workflow.save(memo).saved
        True
    """

    def __init__(self, database: Database):
        self.database = database

    def start_memo(self, operated_date: Optional[dt.date] = None) -> TripMemo:
        """Start a memo under the next free memo number."""
        memo_no = self.database.memos.next_memo_number()
        logger.info(f"Starting memo {memo_no}")
        return recompute(new_memo(memo_no, operated_date))

    def load(self, memo_no: str) -> TripMemo:
        """
        Raises:
            RecordNotFoundError: If no memo has that number
        """
        memo = self.database.memos.find(memo_no)
        if memo is None:
            raise RecordNotFoundError(f"Memo {memo_no} not found")
        return memo

    def select_customer(self, memo: TripMemo, customer_name: str) -> TripMemo:
        """
        Set the customer and fill the address from the first matching customer.

        Addresses are cleared when no customer matches the name.
        """
        addresses = self.database.customers.addresses_for(customer_name)
        address1, address2 = addresses[0] if addresses else ("", "")
        if not addresses:
            logger.debug(f"No address found for customer '{customer_name}'")
        return apply_raw_changes(
            memo,
            customer_name=customer_name,
            customer_address1=address1,
            customer_address2=address2,
        )

    def select_service(
        self, memo: TripMemo, product_item: Optional[str], slot: int = 1
    ) -> TripMemo:
        """
        Fill a service slot from the catalog.

        An empty or unknown product item resets the slot to its defaults.
        """
        offering = None
        if product_item:
            offering = find_offering(self.database.service_catalog(), product_item)
            if offering is None:
                logger.warning(
                    f"Service '{product_item}' not found, clearing slot {slot}"
                )
        return apply_service(memo, offering, slot)

    def edit(self, memo: TripMemo, **changes: Any) -> TripMemo:
        """Apply raw field changes and recompute the derived fields."""
        return apply_raw_changes(memo, **changes)

    @log_function_call(level="DEBUG")
    def save(self, memo: TripMemo) -> MemoSaveResult:
        """
        Validate and store a memo.

        Validation errors block the save; warnings are reported alongside
        the stored memo.

        Raises:
            StoreError: If the store rejects the write
        """
        memo = recompute(memo)
        report = validate_memo(memo)

        with LogContext(memo_no=memo.memo_no):
            if not report.is_valid():
                logger.warning(f"Memo not saved: {report.summary()}")
                return MemoSaveResult(memo=memo, report=report)

            message = self.database.memos.save(memo)
            logger.info(f"Memo saved ({report.summary()})")
            return MemoSaveResult(memo=memo, report=report, message=message)

    def delete(self, memo_no: str) -> str:
        """
        Raises:
            RecordNotFoundError: If no memo has that number
        """
        return self.database.memos.delete(memo_no)
