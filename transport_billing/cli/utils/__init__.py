"""CLI utility functions."""

from transport_billing.cli.utils.formatters import (
    format_error,
    format_info,
    format_invoice,
    format_memo,
    format_success,
    format_table,
    format_validation_report,
    format_warning,
)

__all__ = [
    "format_error",
    "format_info",
    "format_invoice",
    "format_memo",
    "format_success",
    "format_table",
    "format_validation_report",
    "format_warning",
]
