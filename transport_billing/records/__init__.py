"""Flat record tables addressed by position."""

from transport_billing.records.index_resolver import (
    filter_records,
    records_equal,
    resolve_index,
)
from transport_billing.records.tabular_table import TabularTable

__all__ = [
    "TabularTable",
    "filter_records",
    "records_equal",
    "resolve_index",
]
