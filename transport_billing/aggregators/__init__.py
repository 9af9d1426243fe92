"""Aggregators module for combining memos into invoices."""

from transport_billing.aggregators.invoice_aggregator import (
    InvoiceAggregator,
    InvoiceTotals,
    summarize_memo,
)

__all__ = [
    "InvoiceAggregator",
    "InvoiceTotals",
    "summarize_memo",
]
