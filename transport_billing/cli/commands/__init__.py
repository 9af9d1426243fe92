"""CLI commands."""

from transport_billing.cli.commands.customers import customer_group, services_group
from transport_billing.cli.commands.database import db_group, report_group
from transport_billing.cli.commands.invoice import invoice_group
from transport_billing.cli.commands.memo import memo_group
from transport_billing.cli.commands.tables import table_group

__all__ = [
    "customer_group",
    "db_group",
    "invoice_group",
    "memo_group",
    "report_group",
    "services_group",
    "table_group",
]
