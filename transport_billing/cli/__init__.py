"""Transport Billing CLI.

This module provides a command-line interface for the transport billing
system. It includes commands for trip memos, invoices, the reference tables,
database backups and reports.
"""

import click

from transport_billing import __version__
from transport_billing.cli.commands import (
    customer_group,
    db_group,
    invoice_group,
    memo_group,
    report_group,
    services_group,
    table_group,
)
from transport_billing.cli.context import AppContext
from transport_billing.config.logging_config import (
    LoggingConfig,
    configure_logging,
    reset_logging,
)


@click.group(
    help="Transport Billing CLI - Record trip memos and invoice customers"
)
@click.version_option(version=__version__)
@click.option("--debug", is_flag=True, help="Log debug output and show tracebacks")
@click.pass_context
def cli(ctx: click.Context, debug: bool):
    """Transport Billing CLI main entry point."""
    logging_config = LoggingConfig.from_env(default_level="WARNING")
    if debug:
        logging_config.log_level = "DEBUG"
    configure_logging(logging_config)

    app = AppContext(debug=debug)
    ctx.obj = app
    ctx.call_on_close(reset_logging)
    ctx.call_on_close(app.close)


# Register commands
cli.add_command(memo_group)
cli.add_command(invoice_group)
cli.add_command(customer_group)
cli.add_command(services_group)
cli.add_command(table_group)
cli.add_command(db_group)
cli.add_command(report_group)


def main():
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
