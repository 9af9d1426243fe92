"""Trip memo commands."""

import datetime as dt
import json
from typing import Dict, Optional, Sequence, Tuple

import click

from transport_billing.calculators.trip_charge_calculator import apply_raw_changes
from transport_billing.cli.context import AppContext, pass_app
from transport_billing.cli.error_handlers import DataValidationError, error_handling
from transport_billing.cli.utils.formatters import (
    format_info,
    format_memo,
    format_success,
    format_table,
    format_validation_report,
)
from transport_billing.models.memo import DERIVED_FIELDS, MemoStatus, TripMemo
from transport_billing.workflows.memo_workflow import MemoSaveResult, MemoWorkflow


def parse_assignments(assignments: Sequence[str]) -> Dict[str, str]:
    """Parse ``FIELD=VALUE`` pairs given on the command line.

    Raises:
        click.BadParameter: If a pair has no ``=``
    """
    changes = {}
    for assignment in assignments:
        field_name, sep, value = assignment.partition("=")
        if not sep or not field_name.strip():
            raise click.BadParameter(
                f"Expected FIELD=VALUE, got '{assignment}'", param_hint="--set"
            )
        changes[field_name.strip()] = value
    return changes


def _parse_date(value: Optional[str]) -> Optional[dt.date]:
    if value is None:
        return None
    try:
        return dt.date.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(
            f"Invalid date: {value}. Expected YYYY-MM-DD", param_hint="--date"
        )


def _fill(
    workflow: MemoWorkflow,
    memo: TripMemo,
    customer: Optional[str],
    services: Tuple[Optional[str], Optional[str]],
    changes: Dict[str, str],
) -> TripMemo:
    if customer is not None:
        memo = workflow.select_customer(memo, customer)
    for slot, product_item in enumerate(services, start=1):
        if product_item is not None:
            memo = workflow.select_service(memo, product_item, slot)
    if changes:
        memo = workflow.edit(memo, **changes)
    return memo


def _report_save(result: MemoSaveResult) -> None:
    for line in format_validation_report(result.report):
        click.echo(line)
    if not result.saved:
        raise DataValidationError(
            f"Memo {result.memo.memo_no or '(no number)'} was not saved",
            recovery_hint="Fix the errors above and run the command again",
        )
    click.echo(format_success(f"{result.message}: {result.memo.memo_no}"))
    click.echo(
        f"Total: {result.memo.total_amount}  Balance: {result.memo.balance}  "
        f"({result.memo.total_amount_in_words})"
    )


_set_option = click.option(
    "--set",
    "assignments",
    multiple=True,
    metavar="FIELD=VALUE",
    help="Set a raw memo field, e.g. --set starting_time1=09:00 (repeatable)",
)


@click.group(name="memo")
def memo_group():
    """Create, view and manage trip memos."""


@memo_group.command(name="calc")
@_set_option
@click.option("--json", "as_json", is_flag=True, help="Print derived fields as JSON")
def calc_memo(assignments: Tuple[str, ...], as_json: bool):
    """Calculate a memo's charges without saving it.

    Example:
        transport-billing memo calc --set starting_time1=09:00 \\
            --set closing_time1=15:30 --set minimum_hours1=4 \\
            --set minimum_charges1=1000 --set additional_hour_rate=200
    """
    with error_handling():
        memo = apply_raw_changes(TripMemo(), **parse_assignments(assignments))
        derived = {name: getattr(memo, name) for name in DERIVED_FIELDS}
        if as_json:
            click.echo(json.dumps(derived, indent=2))
        else:
            click.echo(format_table(["Field", "Value"], list(derived.items())))


@memo_group.command(name="create")
@click.option(
    "--date", "operated_date", default=None, help="Operating date (YYYY-MM-DD)"
)
@click.option("--customer", default=None, help="Customer name; fills the address")
@click.option("--service", default=None, help="Primary service product item")
@click.option("--service2", default=None, help="Secondary service product item")
@_set_option
@pass_app
def create_memo(
    app: AppContext,
    operated_date: Optional[str],
    customer: Optional[str],
    service: Optional[str],
    service2: Optional[str],
    assignments: Tuple[str, ...],
):
    """Create and save a memo under the next memo number."""
    with error_handling(app.debug):
        changes = parse_assignments(assignments)
        workflow = app.memo_workflow()
        memo = workflow.start_memo(_parse_date(operated_date))
        memo = _fill(workflow, memo, customer, (service, service2), changes)
        _report_save(workflow.save(memo))


@memo_group.command(name="update")
@click.argument("memo_no")
@click.option("--customer", default=None, help="Customer name; fills the address")
@click.option("--service", default=None, help="Primary service ('' clears it)")
@click.option("--service2", default=None, help="Secondary service ('' clears it)")
@_set_option
@pass_app
def update_memo(
    app: AppContext,
    memo_no: str,
    customer: Optional[str],
    service: Optional[str],
    service2: Optional[str],
    assignments: Tuple[str, ...],
):
    """Edit raw fields of a saved memo and save it again."""
    with error_handling(app.debug):
        changes = parse_assignments(assignments)
        workflow = app.memo_workflow()
        memo = workflow.load(memo_no)
        memo = _fill(workflow, memo, customer, (service, service2), changes)
        _report_save(workflow.save(memo))


@memo_group.command(name="show")
@click.argument("memo_no")
@click.option("--json", "as_json", is_flag=True, help="Print the memo as JSON")
@pass_app
def show_memo(app: AppContext, memo_no: str, as_json: bool):
    """Show a saved memo."""
    with error_handling(app.debug):
        memo = app.memo_workflow().load(memo_no)
        if as_json:
            click.echo(json.dumps(memo.model_dump(mode="json"), indent=2))
        else:
            click.echo(format_memo(memo))


@memo_group.command(name="list")
@click.option("--customer", default=None, help="Only memos of this customer")
@click.option(
    "--status",
    type=click.Choice([s.value for s in MemoStatus], case_sensitive=False),
    default=None,
    help="Only memos in this status",
)
@pass_app
def list_memos(app: AppContext, customer: Optional[str], status: Optional[str]):
    """List saved memos."""
    with error_handling(app.debug):
        memos = app.database.memos.list_memos()
        if customer:
            memos = [
                m for m in memos if m.customer_name.lower() == customer.strip().lower()
            ]
        if status:
            memos = [m for m in memos if m.status == MemoStatus(status.upper())]

        if not memos:
            click.echo(format_info("No memos found."))
            return

        rows = [
            [
                m.memo_no,
                m.operated_date,
                m.customer_name,
                m.vehicle_no,
                m.total_amount,
                m.balance,
                m.status.value,
            ]
            for m in memos
        ]
        click.echo(
            format_table(
                [
                    "Memo No",
                    "Date",
                    "Customer",
                    "Vehicle",
                    "Total",
                    "Balance",
                    "Status",
                ],
                rows,
            )
        )
        click.echo(format_success(f"Found {len(memos)} memo(s)"))


@memo_group.command(name="delete")
@click.argument("memo_no")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@pass_app
def delete_memo(app: AppContext, memo_no: str, yes: bool):
    """Delete a saved memo."""
    with error_handling(app.debug):
        if not yes:
            click.confirm(f"Delete memo {memo_no}?", abort=True)
        click.echo(format_success(app.memo_workflow().delete(memo_no)))
