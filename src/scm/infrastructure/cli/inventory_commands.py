"""CLI commands for inventory management."""

from __future__ import annotations

import click

from scm.application.adjust_inventory import AdjustInventoryHandler
from scm.application.create_inventory import CreateInventoryHandler
from scm.application.dto import InventoryDTO
from scm.application.queries import InventoryQuery
from scm.application.show_inventory import (
    ListInventoryHandler,
    LowStockHandler,
    ShowInventoryHandler,
)
from scm.application.update_inventory import UpdateInventoryHandler
from scm.domain.exceptions import DomainException
from scm.infrastructure.bootstrap import (
    notification_hub,
    settings,
    stock_policy,
    unit_of_work,
)


def _print_table(rows: list[InventoryDTO]) -> None:
    click.echo(
        f"{'Product':<20} {'Location':<18} {'Total':>7} {'Reserved':>9} "
        f"{'Available':>10} {'Reorder':>8}  ID"
    )
    click.echo("-" * 112)
    for row in rows:
        click.echo(
            f"{row.product_name:<20} {row.location_name:<18} {row.quantity:>7} "
            f"{row.reserved_quantity:>9} {row.available_quantity:>10} "
            f"{row.reorder_point:>8}  {row.id}"
        )


@click.command("create")
@click.option("--product", "product_id", required=True, help="Product ID.")
@click.option("--location", "location_id", required=True, help="Location ID.")
@click.option("--quantity", required=True, type=int, help="Opening quantity.")
@click.option("--reorder-point", default=None, type=int, help="Reorder point.")
def inventory_create(product_id: str, location_id: str, quantity: int,
                     reorder_point: int | None) -> None:
    """Start stocking a product at a location."""
    handler = CreateInventoryHandler(
        uow=unit_of_work(),
        notifier=notification_hub(),
        default_reorder_point=settings().DEFAULT_REORDER_POINT,
    )

    try:
        dto = handler.handle(product_id, location_id, quantity, reorder_point)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Inventory for '{dto.product_name}' at '{dto.location_name}' set to {dto.quantity}")
    click.echo(f"ID: {dto.id}")


@click.command("adjust")
@click.option("--id", "inventory_id", required=True, help="Inventory ID.")
@click.option("--by", "adjustment", required=True, type=int,
              help="Signed change to the on-hand quantity.")
@click.option("--reason", default="", help="Why the stock changed.")
def inventory_adjust(inventory_id: str, adjustment: int, reason: str) -> None:
    """Apply a manual stock adjustment."""
    handler = AdjustInventoryHandler(
        uow=unit_of_work(), notifier=notification_hub(), policy=stock_policy()
    )

    try:
        dto = handler.handle(inventory_id, adjustment, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Inventory for '{dto.product_name}' adjusted by {adjustment:+d}, "
        f"now {dto.quantity} ({dto.available_quantity} available)"
    )


@click.command("update")
@click.option("--id", "inventory_id", required=True, help="Inventory ID.")
@click.option("--reorder-point", required=True, type=int, help="New reorder point.")
def inventory_update(inventory_id: str, reorder_point: int) -> None:
    """Change the reorder point of an inventory record."""
    handler = UpdateInventoryHandler(
        uow=unit_of_work(), notifier=notification_hub(), policy=stock_policy()
    )

    try:
        dto = handler.handle(inventory_id, reorder_point)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Reorder point for '{dto.product_name}' set to {dto.reorder_point}")


@click.command("show")
@click.option("--id", "inventory_id", required=True, help="Inventory ID.")
def inventory_show(inventory_id: str) -> None:
    """Show a single inventory record."""
    try:
        dto = ShowInventoryHandler(uow=unit_of_work()).handle(inventory_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _print_table([dto])


@click.command("list")
@click.option("--location", "location_id", default=None)
@click.option("--product", "product_id", default=None)
@click.option("--search", default=None, help="Match product name or SKU.")
@click.option("--low-stock", is_flag=True, default=False)
@click.option("--page", default=1, type=int)
@click.option("--limit", default=20, type=int)
def inventory_list(**raw) -> None:
    """Show current inventory levels."""
    handler = ListInventoryHandler(uow=unit_of_work(), policy=stock_policy())

    try:
        page = handler.handle(InventoryQuery.parse(**raw))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not page.items:
        click.echo("No inventory records found.")
        return

    _print_table(page.items)
    click.echo(f"Page {page.page} of {page.pages} ({page.total} records)")


@click.command("low-stock")
@click.option("--location", "location_id", default=None)
def inventory_low_stock(location_id: str | None) -> None:
    """List items at or below their reorder point or the threshold, lowest first."""
    rows = LowStockHandler(uow=unit_of_work(), policy=stock_policy()).handle(location_id)

    if not rows:
        click.echo("No low-stock items.")
        return

    _print_table(rows)
