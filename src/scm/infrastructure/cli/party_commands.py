"""CLI commands for customers and suppliers."""

from __future__ import annotations

import click

from scm.application.add_party import AddCustomerHandler, AddSupplierHandler
from scm.domain.exceptions import DomainException
from scm.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--name", required=True)
@click.option("--email", required=True)
def customer_add(name: str, email: str) -> None:
    """Register a customer."""
    try:
        customer = AddCustomerHandler(uow=unit_of_work()).handle(name=name, email=email)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Customer '{customer.name}' <{customer.email}> added")
    click.echo(f"ID: {customer.id}")


@click.command("list")
def customer_list() -> None:
    """List all customers."""
    with unit_of_work() as uow:
        customers = uow.customers.list_all()

    if not customers:
        click.echo("No customers found.")
        return

    click.echo(f"{'Name':<24} {'Email':<32}  ID")
    click.echo("-" * 96)
    for c in customers:
        click.echo(f"{c.name:<24} {c.email:<32}  {c.id}")


@click.command("add")
@click.option("--name", required=True)
@click.option("--email", default=None)
@click.option("--contact", "contact_name", default=None, help="Contact person.")
def supplier_add(name: str, email: str | None, contact_name: str | None) -> None:
    """Register a supplier."""
    handler = AddSupplierHandler(uow=unit_of_work())

    try:
        supplier = handler.handle(name=name, email=email, contact_name=contact_name)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Supplier '{supplier.name}' added")
    click.echo(f"ID: {supplier.id}")


@click.command("list")
def supplier_list() -> None:
    """List all suppliers."""
    with unit_of_work() as uow:
        suppliers = uow.suppliers.list_all()

    if not suppliers:
        click.echo("No suppliers found.")
        return

    click.echo(f"{'Name':<24} {'Contact':<20} {'Email':<28}  ID")
    click.echo("-" * 112)
    for s in suppliers:
        click.echo(f"{s.name:<24} {s.contact_name or '':<20} {s.email or '':<28}  {s.id}")
