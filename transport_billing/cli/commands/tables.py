"""Commands for the flat tables: service areas, rate calculations, lookup.

Rows have no key; a row is picked by repeating its cells with ``--select``
and located again in the full table before it is changed.
"""

from typing import Optional, Tuple

import click

from transport_billing.cli.context import AppContext, pass_app
from transport_billing.cli.error_handlers import error_handling
from transport_billing.cli.utils.formatters import (
    format_info,
    format_success,
    format_table,
)

TABLE_CHOICE = click.Choice(["areas", "calculations", "lookup"])

_select_option = click.option(
    "-s",
    "--select",
    "selected",
    multiple=True,
    required=True,
    help="Cell of the row to change, in column order (repeatable)",
)


@click.group(name="table")
def table_group():
    """View and edit the service areas, rate calculation and lookup tables."""


@table_group.command(name="list")
@click.argument("name", type=TABLE_CHOICE)
@click.option("--search", default=None, help="Only rows with a cell containing this")
@pass_app
def list_table(app: AppContext, name: str, search: Optional[str]):
    """List the rows of a table."""
    with error_handling(app.debug):
        table = app.database.table(name)
        rows = table.search(search)
        header = table.header() or [
            f"Column {i}" for i in range(1, len(table.blank_record()) + 1)
        ]

        if not rows:
            click.echo(format_info(f"No rows found in {name}."))
            return

        click.echo(format_table(header, rows))
        click.echo(format_success(f"{len(rows)} row(s)"))


@table_group.command(name="add")
@click.argument("name", type=TABLE_CHOICE)
@click.argument("cells", nargs=-1, required=True)
@pass_app
def add_row(app: AppContext, name: str, cells: Tuple[str, ...]):
    """Append a row to a table.

    Example:
        transport-billing table add areas "Tambaram" "Area 3"
    """
    with error_handling(app.debug):
        click.echo(format_success(app.database.table(name).add(list(cells))))


@table_group.command(name="update")
@click.argument("name", type=TABLE_CHOICE)
@_select_option
@click.option(
    "-t",
    "--to",
    "new_cells",
    multiple=True,
    required=True,
    help="Cell of the replacement row, in column order (repeatable)",
)
@pass_app
def update_row(
    app: AppContext,
    name: str,
    selected: Tuple[str, ...],
    new_cells: Tuple[str, ...],
):
    """Replace a row of a table.

    Example:
        transport-billing table update areas -s Guindy -s "Area 1" \\
            -t Guindy -t "Area 2"
    """
    with error_handling(app.debug):
        message = app.database.table(name).update(list(selected), list(new_cells))
        click.echo(format_success(message))


@table_group.command(name="delete")
@click.argument("name", type=TABLE_CHOICE)
@_select_option
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@pass_app
def delete_row(app: AppContext, name: str, selected: Tuple[str, ...], yes: bool):
    """Delete a row of a table."""
    with error_handling(app.debug):
        if not yes:
            click.confirm(f"Delete {list(selected)} from {name}?", abort=True)
        click.echo(format_success(app.database.table(name).delete(list(selected))))
