"""Output formatting utilities for CLI."""

from typing import List, Sequence

import click

from transport_billing.models.invoice import Invoice
from transport_billing.models.memo import TripMemo
from transport_billing.validators.validation_report import (
    ValidationReport,
    ValidationSeverity,
)


def format_success(message: str) -> str:
    """Format a success message with green color."""
    return click.style(f"✓ {message}", fg="green", bold=True)


def format_error(message: str) -> str:
    """Format an error message with red color."""
    return click.style(f"✗ {message}", fg="red", bold=True)


def format_warning(message: str) -> str:
    """Format a warning message with yellow color."""
    return click.style(f"⚠ {message}", fg="yellow", bold=True)


def format_info(message: str) -> str:
    """Format an info message with blue color."""
    return click.style(f"ℹ {message}", fg="blue")


def format_table(
    headers: Sequence[str], rows: Sequence[Sequence[str]], max_width: int = 40
) -> str:
    """Format data as a table.

    Args:
        headers: List of column headers
        rows: List of data rows (each row is a list of cell values)
        max_width: Maximum width for each column

    Returns:
        Formatted table as a string
    """
    if not headers:
        return ""

    col_widths = [len(str(h)) for h in headers]
    for row in rows:
        for i, cell in enumerate(row[: len(col_widths)]):
            col_widths[i] = max(col_widths[i], len(str(cell)))
    col_widths = [min(w, max_width) for w in col_widths]

    def _line(cells: Sequence[str]) -> str:
        padded = list(cells) + [""] * (len(col_widths) - len(cells))
        return (
            "|"
            + "|".join(
                f" {str(cell)[:width]:<{width}} "
                for cell, width in zip(padded, col_widths)
            )
            + "|"
        )

    separator = "+" + "+".join("-" * (w + 2) for w in col_widths) + "+"
    lines = [separator, _line(headers), separator]
    if rows:
        lines.extend(_line(row) for row in rows)
        lines.append(separator)

    return "\n".join(lines)


def format_validation_report(
    report: ValidationReport,
    min_severity: ValidationSeverity = ValidationSeverity.INFO,
) -> List[str]:
    """One styled line per issue at or above a severity."""
    styles = {
        ValidationSeverity.ERROR: format_error,
        ValidationSeverity.WARNING: format_warning,
        ValidationSeverity.INFO: format_info,
    }
    return [
        styles[issue.severity](f"{issue.field}: {issue.message} ({issue.value!r})")
        for issue in report.issues
        if issue.severity >= min_severity
    ]


def _join_address(*lines: str) -> str:
    return ", ".join(line for line in lines if line)


def format_memo(memo: TripMemo) -> str:
    """Render a memo as a field/value table, charges last."""
    rows = [
        ["Memo No", memo.memo_no],
        ["Status", memo.status.value],
        ["Date", memo.operated_date],
        ["Upto Date", memo.operated_upto_date],
        ["Customer", memo.customer_name],
        ["Address", _join_address(memo.customer_address1, memo.customer_address2)],
        ["Vehicle", f"{memo.vehicle_no} {memo.vehicle_type}".strip()],
        ["Shift 1", f"{memo.starting_time1} - {memo.closing_time1}"],
        ["Shift 2", f"{memo.starting_time2} - {memo.closing_time2}"],
        ["Service 1", memo.service_item1],
        ["Service 2", memo.service_item2],
        ["Total Hours", memo.total_hours],
        ["Extra Hours", memo.extra_hours],
        ["Additional Hour Amount", memo.additional_hour_amount],
        ["Total Km", memo.total_km],
        ["Km Amount", memo.km_amount],
        [
            "Driver Bata",
            f"{memo.driver_bata_qty} x {memo.driver_bata_rate} "
            f"= {memo.driver_bata_amount}",
        ],
        ["Discount", memo.discount_amount],
        ["Total Amount", memo.total_amount],
        ["Less Advance", memo.less_advance],
        ["Balance", memo.balance],
        ["In Words", memo.total_amount_in_words],
    ]
    return format_table(["Field", "Value"], rows, max_width=100)


def format_invoice(invoice: Invoice) -> str:
    """Render an invoice header, its numbered memo lines and totals."""
    lines = [
        f"Invoice {invoice.invoice_no}  Date: {invoice.invoice_date}",
        f"To: {invoice.customer_name}",
    ]
    lines.extend(a for a in (invoice.customer_address1, invoice.customer_address2) if a)
    rows = [
        [str(position), m.memo_no, m.operated_date, m.vehicle_no, m.total_amount]
        for position, m in enumerate(invoice.memos, start=1)
    ]
    lines.append(format_table(["#", "Memo No", "Date", "Vehicle", "Amount"], rows))
    lines.append(f"Total Amount: {invoice.total_amount}")
    lines.append(f"Less Advance: {invoice.less_advance}")
    lines.append(f"Balance: {invoice.balance}")
    lines.append(f"In Words: {invoice.total_amount_in_words}")
    if invoice.remark:
        lines.append(f"Remark: {invoice.remark}")
    return "\n".join(lines)
