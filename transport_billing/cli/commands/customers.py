"""Customer and service catalog commands."""

from typing import Optional

import click

from transport_billing.cli.context import AppContext, pass_app
from transport_billing.cli.error_handlers import error_handling
from transport_billing.cli.utils.formatters import (
    format_info,
    format_success,
    format_table,
)
from transport_billing.models.customer import Customer


@click.group(name="customer")
def customer_group():
    """Manage customers."""


@customer_group.command(name="list")
@pass_app
def list_customers(app: AppContext):
    """List customers with their addresses."""
    with error_handling(app.debug):
        customers = app.database.customers.list_customers()
        if not customers:
            click.echo(format_info("No customers found."))
            return
        rows = [[c.name, c.address1, c.address2] for c in customers]
        click.echo(format_table(["Name", "Address 1", "Address 2"], rows))


@customer_group.command(name="add")
@click.argument("name")
@click.option("--address1", default="", help="First address line")
@click.option("--address2", default="", help="Second address line")
@pass_app
def add_customer(app: AppContext, name: str, address1: str, address2: str):
    """Add a customer."""
    with error_handling(app.debug):
        customer = Customer(name=name, address1=address1, address2=address2)
        click.echo(format_success(app.database.customers.add(customer)))


@click.group(name="services")
def services_group():
    """Browse the bookable services."""


@services_group.command(name="list")
@click.option("--search", default=None, help="Only services whose label contains this")
@pass_app
def list_services(app: AppContext, search: Optional[str]):
    """List every service offering with its rates.

    Offerings are built from the service areas and the rate calculation
    table; the product item column is what memos refer to.
    """
    with error_handling(app.debug):
        catalog = app.database.service_catalog()
        if search:
            term = search.lower()
            catalog = [
                o
                for o in catalog
                if term in o.label.lower() or term in o.product_item.lower()
            ]

        if not catalog:
            click.echo(format_info("No services found."))
            return

        rows = [
            [
                o.product_item,
                o.label,
                o.minimum_hours,
                o.minimum_km,
                o.minimum_charges,
                o.additional_hour_charges,
                o.driver_bata,
            ]
            for o in catalog
        ]
        click.echo(
            format_table(
                [
                    "Product Item",
                    "Service",
                    "Min Hours",
                    "Min Km",
                    "Min Charges",
                    "Extra Hour",
                    "Driver Bata",
                ],
                rows,
                max_width=50,
            )
        )
        click.echo(format_success(f"{len(catalog)} service(s)"))
