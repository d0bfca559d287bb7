"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from scm.application.cancel_order import CancelOrderHandler
from scm.application.confirm_order import ConfirmOrderHandler
from scm.application.create_order import CreateOrderHandler
from scm.application.dto import OrderDTO, OrderItemSpec
from scm.application.fulfill_order import FulfillOrderHandler
from scm.application.list_orders import ListOrdersHandler
from scm.application.process_order import StartProcessingHandler
from scm.application.queries import OrderQuery
from scm.application.return_order import ReturnOrderHandler
from scm.application.show_order import ShowOrderHandler
from scm.application.update_order import UpdateOrderHandler
from scm.domain.exceptions import DomainException
from scm.domain.model.order import OrderPriority, OrderStatus, OrderType
from scm.infrastructure.bootstrap import (
    notification_hub,
    settings,
    stock_policy,
    unit_of_work,
)

_CHOICE = dict(case_sensitive=False)


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'SKU-1:3,SKU-2:5:9.99' into OrderItemSpec list.

    Each entry is PRODUCT:QTY or PRODUCT:QTY:UNIT_PRICE, where PRODUCT is a
    SKU or a product id.
    """
    specs: list[OrderItemSpec] = []
    for entry in raw.split(","):
        parts = [p.strip() for p in entry.strip().split(":")]
        if len(parts) not in (2, 3) or not parts[0]:
            raise click.BadParameter(
                f"Invalid item format '{entry.strip()}'. Expected 'Product:Qty[:UnitPrice]'."
            )
        try:
            qty = int(parts[1])
        except ValueError:
            raise click.BadParameter(f"Invalid quantity '{parts[1]}' for product '{parts[0]}'.")
        price = parts[2] if len(parts) == 3 else None
        specs.append(OrderItemSpec(product_id=parts[0], quantity=qty, unit_price=price))
    return specs


def _resolve_skus(specs: list[OrderItemSpec]) -> list[OrderItemSpec]:
    """Swap SKUs for product ids; unknown references are left for the handler to reject."""
    resolved: list[OrderItemSpec] = []
    with unit_of_work() as uow:
        for spec in specs:
            product = uow.products.get_by_sku(spec.product_id)
            if product is not None:
                spec = OrderItemSpec(product.id, spec.quantity, spec.unit_price)
            resolved.append(spec)
    return resolved


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order {dto.order_number}  ({dto.order_type}, status={dto.status})")
    click.echo(f"ID:       {dto.id}")
    click.echo(f"Priority: {dto.priority}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.fulfilled_date:
        click.echo(f"Shipped:  {dto.fulfilled_date}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>12}")
    click.echo(f"  {'-'*54}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} "
            f"{'$' + item.unit_price:>10} {'$' + item.line_total:>12}"
        )
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Order Total':<30} {'$' + dto.total_amount:>23}")
    if dto.notes:
        click.echo()
        click.echo(f"Notes:\n{dto.notes}")


@click.command("create")
@click.option("--type", "order_type", required=True,
              type=click.Choice([t.value for t in OrderType], **_CHOICE))
@click.option("--location", "location_id", required=True, help="Location ID.")
@click.option("--items", required=True, help="Items as 'Product:Qty[:UnitPrice],...'.")
@click.option("--customer", "customer_id", default=None, help="Customer ID (SALES).")
@click.option("--supplier", "supplier_id", default=None, help="Supplier ID (PURCHASE).")
@click.option("--priority", default=None,
              type=click.Choice([p.value for p in OrderPriority], **_CHOICE))
@click.option("--expected", "expected_date", default=None, type=click.DateTime(),
              help="Expected date.")
@click.option("--notes", default=None)
def order_create(order_type, location_id, items, customer_id, supplier_id,
                 priority, expected_date, notes) -> None:
    """Create a new order (SALES orders reserve stock)."""
    specs = _parse_items(items)
    handler = CreateOrderHandler(
        uow=unit_of_work(),
        notifier=notification_hub(),
        policy=stock_policy(),
        number_attempts=settings().ORDER_NUMBER_ATTEMPTS,
    )

    try:
        dto = handler.handle(
            order_type=order_type,
            location_id=location_id,
            items=_resolve_skus(specs),
            customer_id=customer_id,
            supplier_id=supplier_id,
            priority=priority,
            expected_date=expected_date,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} created  (status={dto.status})")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, help="Order ID to display.")
def order_show(order_id: str) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(uow=unit_of_work())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--status", default=None,
              type=click.Choice([s.value for s in OrderStatus], **_CHOICE))
@click.option("--type", "order_type", default=None,
              type=click.Choice([t.value for t in OrderType], **_CHOICE))
@click.option("--location", "location_id", default=None)
@click.option("--customer", "customer_id", default=None)
@click.option("--supplier", "supplier_id", default=None)
@click.option("--priority", default=None,
              type=click.Choice([p.value for p in OrderPriority], **_CHOICE))
@click.option("--from", "start_date", default=None, type=click.DateTime())
@click.option("--to", "end_date", default=None, type=click.DateTime())
@click.option("--page", default=1, type=int)
@click.option("--limit", default=20, type=int)
def order_list(**raw) -> None:
    """List orders, newest first."""
    try:
        query = OrderQuery.parse(**raw)
        page = ListOrdersHandler(uow=unit_of_work()).handle(query)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not page.items:
        click.echo("No orders found.")
        return

    click.echo(f"{'Number':<16} {'Type':<9} {'Status':<11} {'Priority':<8} {'Total':>12}  ID")
    click.echo("-" * 96)
    for dto in page.items:
        click.echo(
            f"{dto.order_number:<16} {dto.order_type:<9} {dto.status:<11} "
            f"{dto.priority:<8} {'$' + dto.total_amount:>12}  {dto.id}"
        )
    click.echo(f"Page {page.page} of {page.pages} ({page.total} orders)")


@click.command("confirm")
@click.option("--id", "order_id", required=True, help="Order ID to confirm.")
def order_confirm(order_id: str) -> None:
    """Confirm a pending order."""
    handler = ConfirmOrderHandler(uow=unit_of_work(), notifier=notification_hub())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} confirmed.")


@click.command("update")
@click.option("--id", "order_id", required=True, help="Order ID to update.")
@click.option("--priority", default=None,
              type=click.Choice([p.value for p in OrderPriority], **_CHOICE))
@click.option("--expected", "expected_date", default=None, type=click.DateTime(),
              help="Expected date.")
@click.option("--notes", default=None, help="Replaces the current notes.")
def order_update(order_id: str, priority, expected_date, notes) -> None:
    """Change priority, expected date or notes of an open order."""
    handler = UpdateOrderHandler(uow=unit_of_work(), notifier=notification_hub())

    try:
        dto = handler.handle(order_id, priority, expected_date, notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} updated  (priority={dto.priority})")


@click.command("process")
@click.option("--id", "order_id", required=True, help="Order ID to start processing.")
def order_process(order_id: str) -> None:
    """Move a confirmed order into processing."""
    handler = StartProcessingHandler(uow=unit_of_work(), notifier=notification_hub())

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} is processing.")


@click.command("fulfill")
@click.option("--id", "order_id", required=True, help="Order ID to fulfill.")
def order_fulfill(order_id: str) -> None:
    """Ship an order and move its stock."""
    s = settings()
    handler = FulfillOrderHandler(
        uow=unit_of_work(),
        notifier=notification_hub(),
        policy=stock_policy(),
        default_reorder_point=s.DEFAULT_REORDER_POINT,
    )

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} fulfilled (status={dto.status}).")


@click.command("cancel")
@click.option("--id", "order_id", required=True, help="Order ID to cancel.")
@click.option("--reason", required=True, help="Why the order is cancelled.")
def order_cancel(order_id: str, reason: str) -> None:
    """Cancel an order (releases reserved stock of open SALES orders)."""
    handler = CancelOrderHandler(uow=unit_of_work(), notifier=notification_hub())

    try:
        dto = handler.handle(order_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} cancelled.")


@click.command("return")
@click.option("--id", "order_id", required=True, help="Order ID to mark returned.")
@click.option("--reason", required=True, help="Why the order came back.")
def order_return(order_id: str, reason: str) -> None:
    """Record that a delivered order was returned."""
    handler = ReturnOrderHandler(uow=unit_of_work(), notifier=notification_hub())

    try:
        dto = handler.handle(order_id, reason)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} returned.")
