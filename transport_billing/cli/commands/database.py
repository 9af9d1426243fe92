"""Database export/import and report commands."""

import json
from typing import Optional

import click

from transport_billing.cli.context import AppContext, pass_app
from transport_billing.cli.error_handlers import error_handling
from transport_billing.cli.utils.formatters import (
    format_info,
    format_success,
    format_table,
)
from transport_billing.models.memo import MemoStatus
from transport_billing.reports.memo_register import (
    build_memo_register,
    summarize_outstanding,
)
from transport_billing.stores.record_store import StoreError


@click.group(name="db")
def db_group():
    """Back up and restore the whole database."""


@db_group.command(name="export")
@click.argument("output", type=click.Path(dir_okay=False, writable=True))
@pass_app
def export_db(app: AppContext, output: str):
    """Write every table to a JSON file."""
    with error_handling(app.debug):
        snapshot = app.database.export_snapshot()
        with open(output, "w", encoding="utf-8") as f:
            json.dump(snapshot, f, indent=2)
        counts = ", ".join(f"{name}: {len(rows)}" for name, rows in snapshot.items())
        click.echo(format_success(f"Database exported to {output} ({counts})"))


@db_group.command(name="import")
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@pass_app
def import_db(app: AppContext, source: str, yes: bool):
    """Replace every table with the content of an export file."""
    with error_handling(app.debug):
        try:
            with open(source, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise StoreError(f"{source} is not valid JSON: {e}") from e

        if not yes:
            click.confirm("Replace all data with the import file?", abort=True)
        click.echo(format_success(app.database.import_snapshot(data)))


@click.group(name="report")
def report_group():
    """Reports over the memo table."""


@report_group.command(name="register")
@click.option("--customer", default=None, help="Only memos of this customer")
@click.option(
    "--status",
    type=click.Choice([s.value for s in MemoStatus], case_sensitive=False),
    default=None,
    help="Only memos in this status",
)
@click.option(
    "--outstanding",
    is_flag=True,
    help="Summarize pending memos per customer instead",
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Write the report to this CSV file",
)
@pass_app
def memo_register(
    app: AppContext,
    customer: Optional[str],
    status: Optional[str],
    outstanding: bool,
    output: Optional[str],
):
    """Memo register, or outstanding balances per customer."""
    with error_handling(app.debug):
        register = build_memo_register(
            app.database.memos.list_memos(),
            customer=customer,
            status=MemoStatus(status.upper()) if status else None,
        )
        report = summarize_outstanding(register) if outstanding else register

        if output:
            report.to_csv(output, index=False)
            click.echo(format_success(f"Wrote {len(report)} row(s) to {output}"))
            return

        if report.empty:
            click.echo(format_info("Nothing to report."))
            return

        rows = [[str(value) for value in row] for row in report.itertuples(index=False)]
        click.echo(format_table(list(report.columns), rows))
