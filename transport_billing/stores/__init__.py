"""Record stores and repositories.

The database bundle lives in :mod:`transport_billing.stores.database`; it
builds on the flat tables of :mod:`transport_billing.records`, which in turn
sit on the stores exported here.
"""

from transport_billing.stores.record_store import (
    InMemoryRecordStore,
    Record,
    RecordNotFoundError,
    RecordStore,
    StoreError,
)
from transport_billing.stores.repositories import (
    CustomerRepository,
    InvoiceRepository,
    MemoRepository,
    next_sequence_number,
)
from transport_billing.stores.sheets_store import SheetsRecordStore

__all__ = [
    "Record",
    "RecordStore",
    "InMemoryRecordStore",
    "SheetsRecordStore",
    "StoreError",
    "RecordNotFoundError",
    "MemoRepository",
    "InvoiceRepository",
    "CustomerRepository",
    "next_sequence_number",
]
