"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from scm.application.add_product import AddProductHandler
from scm.application.update_product import UpdateProductHandler
from scm.domain.exceptions import DomainException
from scm.infrastructure.bootstrap import unit_of_work


@click.command("add")
@click.option("--sku", required=True, help="Stock keeping unit, unique.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
def product_add(sku: str, name: str, price: str) -> None:
    """Add a new product to the catalog."""
    handler = AddProductHandler(uow=unit_of_work())

    try:
        product = handler.handle(sku=sku, name=name, unit_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.sku} '{product.name}' added at {product.unit_price}")
    click.echo(f"ID: {product.id}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    with unit_of_work() as uow:
        products = uow.products.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'SKU':<14} {'Name':<24} {'Price':>10}  ID")
    click.echo("-" * 88)
    for p in products:
        click.echo(f"{p.sku:<14} {p.name:<24} {str(p.unit_price):>10}  {p.id}")


@click.command("update")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--price", required=True, help="New price (e.g. 29.99).")
def product_update(product_id: str, price: str) -> None:
    """Update a product's price."""
    handler = UpdateProductHandler(uow=unit_of_work())

    try:
        product = handler.handle(product_id=product_id, new_price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product {product.sku} price updated to {product.unit_price}")
