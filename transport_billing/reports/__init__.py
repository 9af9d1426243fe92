"""Tabular reports over the memo table."""

from transport_billing.reports.memo_register import (
    OUTSTANDING_COLUMNS,
    REGISTER_COLUMNS,
    build_memo_register,
    summarize_outstanding,
)

__all__ = [
    "OUTSTANDING_COLUMNS",
    "REGISTER_COLUMNS",
    "build_memo_register",
    "summarize_outstanding",
]
