"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the application layer and its callers (CLI,
notification payloads) without exposing domain internals.  Amounts are
decimal strings, timestamps ISO-8601 strings.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from scm.domain.model.delivery import Delivery
from scm.domain.model.inventory import InventoryItem
from scm.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one requested line.

    ``unit_price`` of None snapshots the product's current catalog price.
    """

    product_id: str
    quantity: int
    unit_price: str | Decimal | None = None


@dataclass(frozen=True)
class OrderLineItemDTO:
    product_id: str
    product_name: str
    quantity: int
    unit_price: str
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: str
    order_number: str
    order_type: str
    status: str
    priority: str
    location_id: str
    customer_id: str | None
    supplier_id: str | None
    total_amount: str
    expected_date: str | None
    fulfilled_date: str | None
    notes: str | None
    created_at: str
    items: list[OrderLineItemDTO]


@dataclass(frozen=True)
class InventoryDTO:
    id: str
    product_id: str
    product_name: str
    location_id: str
    location_name: str
    quantity: int
    reserved_quantity: int
    available_quantity: int
    reorder_point: int
    last_updated: str


@dataclass(frozen=True)
class DeliveryDTO:
    id: str
    order_id: str
    from_location_id: str
    status: str
    scheduled_date: str
    delivered_date: str | None
    driver: str | None
    tracking_number: str | None
    notes: str | None


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def to_order_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,
        order_number=order.order_number,
        order_type=order.order_type.value,
        status=order.status.value,
        priority=order.priority.value,
        location_id=order.location_id,
        customer_id=order.customer_id,
        supplier_id=order.supplier_id,
        total_amount=f"{order.total_amount.amount:.2f}",
        expected_date=_iso(order.expected_date),
        fulfilled_date=_iso(order.fulfilled_date),
        notes=order.notes,
        created_at=order.created_at.isoformat(),
        items=[
            OrderLineItemDTO(
                product_id=item.product_id,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=f"{item.unit_price.amount:.2f}",
                line_total=f"{item.line_total.amount:.2f}",
            )
            for item in order.items
        ],
    )


def to_inventory_dto(item: InventoryItem) -> InventoryDTO:
    return InventoryDTO(
        id=item.id,
        product_id=item.product_id,
        product_name=item.product_name,
        location_id=item.location_id,
        location_name=item.location_name,
        quantity=item.quantity,
        reserved_quantity=item.reserved_quantity,
        available_quantity=item.available_quantity,
        reorder_point=item.reorder_point,
        last_updated=item.last_updated.isoformat(),
    )


def to_delivery_dto(delivery: Delivery) -> DeliveryDTO:
    return DeliveryDTO(
        id=delivery.id,
        order_id=delivery.order_id,
        from_location_id=delivery.from_location_id,
        status=delivery.status.value,
        scheduled_date=delivery.scheduled_date.isoformat(),
        delivered_date=_iso(delivery.delivered_date),
        driver=delivery.driver,
        tracking_number=delivery.tracking_number,
        notes=delivery.notes,
    )
