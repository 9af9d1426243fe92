"""Repositories mapping store rows to billing models.

Memos, invoices and customers are kept in headed tables: position 0 holds
the column names and every later row is read by name, so a column added
to a model does not shift the meaning of older rows. The header is written
on the first insert into an empty table.
"""

import logging
from typing import Generic, Iterable, List, Optional, Tuple, Type, TypeVar

from pydantic import ValidationError

from transport_billing.calculators.trip_charge_calculator import recompute
from transport_billing.models.base import BaseDataModel
from transport_billing.models.customer import Customer
from transport_billing.models.invoice import Invoice
from transport_billing.models.memo import MemoStatus, TripMemo
from transport_billing.stores.record_store import (
    Record,
    RecordNotFoundError,
    RecordStore,
    StoreError,
)
from transport_billing.utils.logging_utils import LogContext

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseDataModel)


def next_sequence_number(existing: Iterable[str], prefix: str, width: int = 3) -> str:
    """
    Issue the number following the highest one seen for a prefix.

    Numbers look like ``SVS-004``. Values with another prefix or a
    non-numeric running part are ignored.

    Args:
        existing: Numbers already issued
        prefix: Number prefix without the hyphen
        width: Zero-padded width of the running part

    Returns:
        The next number, e.g. ``SVS-005``

    Example:
        >>> next_sequence_number(["SVS-001", "SVS-004", "INV-009"], "SVS")
        'SVS-005'
    """
    highest = 0
    marker = f"{prefix}-"
    for number in existing:
        if not number or not number.startswith(marker):
            continue
        running = number[len(marker) :]
        if running.isdigit():
            highest = max(highest, int(running))
    return f"{prefix}-{str(highest + 1).zfill(width)}"


class _ModelTable(Generic[ModelT]):
    """Headed table of one model type."""

    model: Type[ModelT]
    key_field: str

    def __init__(self, store: RecordStore):
        self.store = store

    def _entries(self) -> List[Tuple[int, ModelT]]:
        """Return (store position, model) for every data row."""
        rows = self.store.list()
        if not rows:
            return []

        header = rows[0]
        known = set(self.model.model_fields)
        entries = []
        for position, row in enumerate(rows[1:], start=1):
            if not any(cell.strip() for cell in row):
                continue
            padded = row + [""] * (len(header) - len(row))
            data = {
                name: value
                for name, value in zip(header, padded)
                if name in known
            }
            try:
                entries.append((position, self.model.model_validate(data)))
            except ValidationError as e:
                raise StoreError(
                    f"Row {position} of '{self.store.name}' is not a valid "
                    f"{self.model.__name__}: {e.error_count()} invalid fields"
                ) from e
        return entries

    def _header(self) -> Record:
        rows = self.store.list()
        if rows:
            return rows[0]
        header = self.model.column_names()
        self.store.insert(header)
        logger.info(f"Wrote header row to '{self.store.name}'")
        return header

    def _row_for(self, item: ModelT, header: Record) -> Record:
        data = dict(zip(item.column_names(), item.to_row()))
        return [data.get(name, "") for name in header]

    def _position_of(self, key: str) -> Optional[int]:
        for position, item in self._entries():
            if getattr(item, self.key_field) == key:
                return position
        return None

    def _find(self, key: str) -> Optional[ModelT]:
        for _, item in self._entries():
            if getattr(item, self.key_field) == key:
                return item
        return None

    def _delete(self, key: str) -> str:
        position = self._position_of(key)
        if position is None:
            raise RecordNotFoundError(f"'{key}' not found in '{self.store.name}'")
        return self.store.delete_at(position)


class MemoRepository(_ModelTable[TripMemo]):
    """
    Trip memos keyed by memo number.

    Example:
        >>> memos = MemoRepository(store)
        >>> memo = new_memo(memos.next_memo_number())
        >>> memos.save(memo)
        "Row added to 'memos'"
    """

    model = TripMemo
    key_field = "memo_no"

    def __init__(self, store: RecordStore, prefix: str = "SVS", width: int = 3):
        super().__init__(store)
        self.prefix = prefix
        self.width = width

    def list_memos(self) -> List[TripMemo]:
        return [memo for _, memo in self._entries()]

    def find(self, memo_no: str) -> Optional[TripMemo]:
        return self._find(memo_no)

    def save(self, memo: TripMemo) -> str:
        """
        Store a memo, replacing the row with the same memo number.

        Derived fields are recomputed before writing, whatever the caller
        passed in.

        Raises:
            StoreError: If the memo has no number or the store fails
        """
        if not memo.memo_no.strip():
            raise StoreError("Cannot save a memo without a memo number")

        memo = recompute(memo)
        with LogContext(memo_no=memo.memo_no):
            header = self._header()
            position = self._position_of(memo.memo_no)
            row = self._row_for(memo, header)
            if position is None:
                logger.info(f"Inserting memo {memo.memo_no}")
                return self.store.insert(row)
            logger.info(f"Updating memo {memo.memo_no} at row {position}")
            return self.store.update_at(position, row)

    def delete(self, memo_no: str) -> str:
        """
        Raises:
            RecordNotFoundError: If no memo has that number
        """
        with LogContext(memo_no=memo_no):
            logger.info(f"Deleting memo {memo_no}")
            return self._delete(memo_no)

    def next_memo_number(self) -> str:
        return next_sequence_number(
            (memo.memo_no for memo in self.list_memos()), self.prefix, self.width
        )

    def pending_for_customer(self, customer_name: str) -> List[TripMemo]:
        """Pending memos of a customer, in storage order."""
        wanted = customer_name.strip().lower()
        return [
            memo
            for memo in self.list_memos()
            if memo.status == MemoStatus.PENDING
            and memo.customer_name.strip().lower() == wanted
        ]

    def set_status(self, memo_no: str, status: MemoStatus) -> str:
        """
        Change a memo's billing status in place.

        Raises:
            RecordNotFoundError: If no memo has that number
        """
        with LogContext(memo_no=memo_no):
            for position, memo in self._entries():
                if memo.memo_no == memo_no:
                    header = self._header()
                    updated = memo.model_copy(update={"status": status})
                    logger.debug(f"Setting memo {memo_no} to {status.value}")
                    return self.store.update_at(
                        position, self._row_for(updated, header)
                    )
        raise RecordNotFoundError(f"'{memo_no}' not found in '{self.store.name}'")


class InvoiceRepository(_ModelTable[Invoice]):
    """Invoices keyed by invoice number. Invoices are never edited in place."""

    model = Invoice
    key_field = "invoice_no"

    def __init__(self, store: RecordStore, prefix: str = "INV", width: int = 3):
        super().__init__(store)
        self.prefix = prefix
        self.width = width

    def list_invoices(self) -> List[Invoice]:
        return [invoice for _, invoice in self._entries()]

    def find(self, invoice_no: str) -> Optional[Invoice]:
        return self._find(invoice_no)

    def insert(self, invoice: Invoice) -> str:
        """
        Raises:
            StoreError: If an invoice with the same number already exists
        """
        with LogContext(invoice_no=invoice.invoice_no):
            if self._position_of(invoice.invoice_no) is not None:
                raise StoreError(f"Invoice {invoice.invoice_no} already exists")
            header = self._header()
            logger.info(f"Inserting invoice {invoice.invoice_no}")
            return self.store.insert(self._row_for(invoice, header))

    def delete(self, invoice_no: str) -> str:
        with LogContext(invoice_no=invoice_no):
            logger.info(f"Deleting invoice {invoice_no}")
            return self._delete(invoice_no)

    def next_invoice_number(self) -> str:
        return next_sequence_number(
            (invoice.invoice_no for invoice in self.list_invoices()),
            self.prefix,
            self.width,
        )


class CustomerRepository(_ModelTable[Customer]):
    """Customers with their two-line addresses."""

    model = Customer
    key_field = "name"

    def list_customers(self) -> List[Customer]:
        return [customer for _, customer in self._entries()]

    def names(self) -> List[str]:
        return [customer.name for customer in self.list_customers()]

    def addresses_for(self, name: str) -> List[Tuple[str, str]]:
        """
        Addresses of every customer whose name contains ``name``.

        Matching is a case-insensitive substring match, so a partially
        typed name already offers candidate addresses.
        """
        term = name.strip().lower()
        if not term:
            return []
        return [
            (customer.address1, customer.address2)
            for customer in self.list_customers()
            if term in customer.name.lower()
        ]

    def add(self, customer: Customer) -> str:
        header = self._header()
        logger.info(f"Adding customer {customer.name}")
        return self.store.insert(self._row_for(customer, header))
