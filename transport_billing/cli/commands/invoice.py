"""Invoice commands."""

import json
from typing import Optional, Tuple

import click

from transport_billing.cli.context import AppContext, pass_app
from transport_billing.cli.error_handlers import DataValidationError, error_handling
from transport_billing.cli.utils.formatters import (
    format_info,
    format_invoice,
    format_success,
    format_table,
)


@click.group(name="invoice")
def invoice_group():
    """Bill a customer's memos and manage invoices."""


@invoice_group.command(name="create")
@click.option(
    "--customer",
    default=None,
    help="Invoice every pending memo of this customer",
)
@click.option(
    "--memo",
    "memo_nos",
    multiple=True,
    help="Memo number to include, in order (repeatable)",
)
@click.option("--advance", default="0", help="Advance already received")
@click.option("--remark", default="", help="Free text printed on the invoice")
@click.option("--dry-run", is_flag=True, help="Show the invoice without saving it")
@pass_app
def create_invoice(
    app: AppContext,
    customer: Optional[str],
    memo_nos: Tuple[str, ...],
    advance: str,
    remark: str,
    dry_run: bool,
):
    """Create an invoice from selected memos.

    Example:
        transport-billing invoice create --memo SVS-001 --memo SVS-003 --advance 200
        transport-billing invoice create --customer "John Doe"
    """
    with error_handling(app.debug):
        workflow = app.invoice_workflow()
        selected = list(memo_nos)
        if not selected:
            if not customer:
                raise DataValidationError(
                    "No memos selected",
                    recovery_hint="Pass --memo MEMO_NO or --customer NAME",
                )
            selected = [memo.memo_no for memo in workflow.pending_memos(customer)]
            if not selected:
                click.echo(format_info(f"No pending memos for {customer}."))
                return

        invoice = workflow.build_invoice(selected, less_advance=advance, remark=remark)
        click.echo(format_invoice(invoice))

        if dry_run:
            click.echo(format_info("Dry run, invoice not saved."))
            return

        workflow.save(invoice)
        click.echo(format_success(f"Invoice {invoice.invoice_no} saved"))


@invoice_group.command(name="list")
@pass_app
def list_invoices(app: AppContext):
    """List saved invoices."""
    with error_handling(app.debug):
        invoices = app.database.invoices.list_invoices()
        if not invoices:
            click.echo(format_info("No invoices found."))
            return

        rows = [
            [
                inv.invoice_no,
                inv.invoice_date,
                inv.customer_name,
                str(len(inv.memos)),
                inv.total_amount,
                inv.balance,
            ]
            for inv in invoices
        ]
        click.echo(
            format_table(
                ["Invoice No", "Date", "Customer", "Memos", "Total", "Balance"], rows
            )
        )
        click.echo(format_success(f"Found {len(invoices)} invoice(s)"))


@invoice_group.command(name="show")
@click.argument("invoice_no")
@click.option("--json", "as_json", is_flag=True, help="Print the invoice as JSON")
@pass_app
def show_invoice(app: AppContext, invoice_no: str, as_json: bool):
    """Show a saved invoice."""
    with error_handling(app.debug):
        invoice = app.invoice_workflow().load(invoice_no)
        if as_json:
            click.echo(json.dumps(invoice.model_dump(mode="json"), indent=2))
        else:
            click.echo(format_invoice(invoice))


@invoice_group.command(name="delete")
@click.argument("invoice_no")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@pass_app
def delete_invoice(app: AppContext, invoice_no: str, yes: bool):
    """Delete an invoice; its memos become pending again."""
    with error_handling(app.debug):
        if not yes:
            click.confirm(f"Delete invoice {invoice_no}?", abort=True)
        click.echo(format_success(app.invoice_workflow().delete(invoice_no)))
