"""Data models for the transport billing system.

This package contains Pydantic models for all business entities:
- BaseDataModel: Base class with common configuration
- TripMemo: Billing record of a single trip
- MemoSummary: Memo line carried by an invoice
- Invoice: Aggregation of a customer's memos
- Customer: Billed customer
- ServiceOffering: Vehicle type operated within an area
"""

from transport_billing.models.base import BaseDataModel
from transport_billing.models.customer import Customer, ServiceOffering
from transport_billing.models.invoice import Invoice, MemoSummary
from transport_billing.models.memo import (
    DERIVED_FIELDS,
    RAW_FIELDS,
    MemoStatus,
    TripMemo,
    new_memo,
)

__all__ = [
    "BaseDataModel",
    "Customer",
    "ServiceOffering",
    "Invoice",
    "MemoSummary",
    "MemoStatus",
    "TripMemo",
    "RAW_FIELDS",
    "DERIVED_FIELDS",
    "new_memo",
]
