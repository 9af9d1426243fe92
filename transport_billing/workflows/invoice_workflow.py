"""Invoice workflow.

Builds an invoice from a customer's selected memos and saves it together
with the memos' status change. Saving touches two tables; any failure
undoes the status changes already made, so a failed save leaves neither a
half-billed memo nor an invoice behind.
"""

import datetime as dt
import logging
from typing import Dict, Iterable, List, Optional, Sequence

from transport_billing.aggregators.invoice_aggregator import (
    InvoiceAggregator,
    summarize_memo,
)
from transport_billing.models.invoice import Invoice
from transport_billing.models.memo import MemoStatus, TripMemo
from transport_billing.stores.database import Database
from transport_billing.stores.record_store import RecordNotFoundError, StoreError
from transport_billing.utils.logging_utils import LogContext, log_function_call

logger = logging.getLogger(__name__)


class InvoiceWorkflow:
    """
    Create, view and delete customer invoices.

    Example:
        >>> workflow = InvoiceWorkflow(database)
        >>> pending = workflow.pending_memos("John Doe")
        >>> invoice = workflow.build_invoice([m.memo_no for m in pending], "200")
        >>> workflow.save(invoice)
        "Row added to 'invoices'"
    """

    def __init__(
        self, database: Database, aggregator: Optional[InvoiceAggregator] = None
    ):
        self.database = database
        self.aggregator = aggregator or InvoiceAggregator()

    def pending_memos(self, customer_name: str) -> List[TripMemo]:
        """Memos of a customer that are not yet invoiced."""
        return self.database.memos.pending_for_customer(customer_name)

    def build_invoice(
        self,
        memo_nos: Sequence[str],
        less_advance: str = "0",
        remark: str = "",
        invoice_date: Optional[dt.date] = None,
    ) -> Invoice:
        """
        Build an unsaved invoice from selected memo numbers.

        Memo order follows the selection and a repeated number is listed
        once. Unknown memo numbers are skipped; the customer and address come
        from the first memo.

        Raises:
            RecordNotFoundError: If none of the memo numbers exists
        """
        memos = []
        for memo_no in dict.fromkeys(memo_nos):
            memo = self.database.memos.find(memo_no)
            if memo is None:
                logger.warning(f"Memo {memo_no} not found, left out of invoice")
                continue
            memos.append(memo)

        if not memos:
            raise RecordNotFoundError(
                f"None of the selected memos exist: {', '.join(memo_nos)}"
            )

        first = memos[0]
        invoice = Invoice(
            invoice_no=self.database.invoices.next_invoice_number(),
            invoice_date=(invoice_date or dt.date.today()).isoformat(),
            customer_name=first.customer_name,
            customer_address1=first.customer_address1,
            customer_address2=first.customer_address2,
            memos=[summarize_memo(memo) for memo in memos],
            less_advance=less_advance,
            remark=remark,
        )
        return self.aggregator.apply(invoice)

    def _set_statuses(
        self, memo_nos: Iterable[str], status: MemoStatus
    ) -> Dict[str, MemoStatus]:
        """
        Move memos to a status, undoing every change if one fails.

        Returns:
            Previous status of each memo that changed
        """
        previous = {}
        try:
            for memo_no in memo_nos:
                memo = self.database.memos.find(memo_no)
                if memo is None:
                    raise RecordNotFoundError(f"Memo {memo_no} not found")
                if memo.status == status:
                    continue
                self.database.memos.set_status(memo_no, status)
                previous[memo_no] = memo.status
        except StoreError:
            self._restore(previous)
            raise
        return previous

    def _restore(self, previous: Dict[str, MemoStatus]) -> None:
        for memo_no, status in previous.items():
            try:
                self.database.memos.set_status(memo_no, status)
            except StoreError as e:
                logger.error(f"Could not restore status of memo {memo_no}: {e}")

    @log_function_call(level="DEBUG")
    def save(self, invoice: Invoice) -> str:
        """
        Store an invoice and mark its memos COMPLETED.

        Raises:
            StoreError: If the invoice number exists, a memo is listed twice,
                        already invoiced or billed to another customer,
                        or a store write fails
            RecordNotFoundError: If a memo of the invoice no longer exists
        """
        invoice = self.aggregator.apply(invoice)
        memo_nos = [summary.memo_no for summary in invoice.memos]

        with LogContext(invoice_no=invoice.invoice_no):
            if not memo_nos:
                raise StoreError("Cannot save an invoice without memos")
            if self.database.invoices.find(invoice.invoice_no) is not None:
                raise StoreError(f"Invoice {invoice.invoice_no} already exists")
            if len(set(memo_nos)) != len(memo_nos):
                raise StoreError("An invoice cannot list the same memo twice")
            customer = invoice.customer_name.strip().lower()
            for memo_no in memo_nos:
                memo = self.database.memos.find(memo_no)
                if memo is None:
                    continue
                if memo.status == MemoStatus.COMPLETED:
                    raise StoreError(f"Memo {memo_no} is already invoiced")
                if memo.customer_name.strip().lower() != customer:
                    raise StoreError(
                        f"Memo {memo_no} belongs to {memo.customer_name}, "
                        f"not {invoice.customer_name}"
                    )

            previous = self._set_statuses(memo_nos, MemoStatus.COMPLETED)
            try:
                message = self.database.invoices.insert(invoice)
            except StoreError:
                logger.error("Invoice insert failed, restoring memo statuses")
                self._restore(previous)
                raise

            logger.info(
                f"Invoice saved for {invoice.customer_name}: "
                f"{len(memo_nos)} memos, total {invoice.total_amount}"
            )
            return message

    def load(self, invoice_no: str) -> Invoice:
        """
        Raises:
            RecordNotFoundError: If no invoice has that number
        """
        invoice = self.database.invoices.find(invoice_no)
        if invoice is None:
            raise RecordNotFoundError(f"Invoice {invoice_no} not found")
        return invoice

    def delete(self, invoice_no: str) -> str:
        """
        Delete an invoice and return its memos to PENDING.

        Memos deleted since the invoice was saved are skipped.

        Raises:
            RecordNotFoundError: If no invoice has that number
        """
        invoice = self.load(invoice_no)
        with LogContext(invoice_no=invoice_no):
            existing = [
                summary.memo_no
                for summary in invoice.memos
                if self.database.memos.find(summary.memo_no) is not None
            ]
            previous = self._set_statuses(existing, MemoStatus.PENDING)
            try:
                return self.database.invoices.delete(invoice_no)
            except StoreError:
                logger.error("Invoice delete failed, restoring memo statuses")
                self._restore(previous)
                raise
