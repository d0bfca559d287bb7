"""Application service: Create Order use case.

Creates the order, its line items and, for SALES orders, the inventory
reservation in a single transaction.  Either all of it commits or none
of it does.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone

import structlog

from scm.application import notifications
from scm.application.dto import OrderDTO, OrderItemSpec, to_order_dto
from scm.application.notifications import NotificationSink, NullNotificationSink, broadcast
from scm.application.queries import parse_enum
from scm.domain.exceptions import DomainException, DuplicateOrderNumberError, EntityNotFoundError
from scm.domain.model.inventory import InventoryItem
from scm.domain.model.order import (
    Order,
    OrderLineItem,
    OrderPriority,
    OrderType,
    generate_order_number,
)
from scm.domain.model.value_objects import Money, Quantity
from scm.domain.repository.unit_of_work import UnitOfWork
from scm.domain.service.inventory_reservation_service import InventoryReservationService
from scm.domain.service.stock_policy import StockPolicy

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: NotificationSink | None = None,
        policy: StockPolicy | None = None,
        number_attempts: int = 3,
        number_generator=generate_order_number,
    ) -> None:
        self._uow = uow
        self._notifier = notifier or NullNotificationSink()
        self._policy = policy or StockPolicy()
        self._number_attempts = number_attempts
        self._generate_number = number_generator

    def handle(
        self,
        order_type: OrderType | str,
        location_id: str,
        items: list[OrderItemSpec],
        customer_id: str | None = None,
        supplier_id: str | None = None,
        priority: OrderPriority | str | None = None,
        expected_date: datetime | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        """Create a new PENDING order.

        Steps:
        1. Resolve location, counterparty and products (fail if not found).
        2. Build line items, snapshotting prices.
        3. Let the Order aggregate compute the total and validate.
        4. Insert the order; for SALES, reserve stock for every line.
        5. Commit, then broadcast.

        Order-number collisions retry the whole transaction.
        """
        order_type = parse_enum(OrderType, order_type, "order type")
        priority = parse_enum(OrderPriority, priority, "priority")

        for attempt in range(1, self._number_attempts + 1):
            try:
                dto, reserved = self._create(
                    order_type, location_id, items, customer_id,
                    supplier_id, priority, expected_date, notes,
                )
            except DuplicateOrderNumberError:
                if attempt == self._number_attempts:
                    raise
                logger.info("Order number collision, retrying", attempt=attempt)
                continue
            except DomainException as exc:
                logger.warning(
                    "Order creation rejected",
                    order_type=order_type.value if order_type else None,
                    location_id=location_id,
                    error=type(exc).__name__,
                    reason=str(exc),
                )
                raise
            break

        logger.info(
            "Order created",
            order_id=dto.id,
            order_number=dto.order_number,
            order_type=dto.order_type,
            total_amount=dto.total_amount,
        )
        broadcast(
            self._notifier,
            notifications.ORDER_CREATED,
            {"type": notifications.ORDER_CREATED, "data": asdict(dto)},
        )
        for inv in reserved:
            if self._policy.available_below_reorder(inv):
                broadcast(
                    self._notifier,
                    notifications.LOW_STOCK_ALERT,
                    notifications.low_stock_payload(inv),
                    notifications.warehouse_topic(inv.location_id),
                )
        return dto

    def _create(
        self,
        order_type: OrderType,
        location_id: str,
        items: list[OrderItemSpec],
        customer_id: str | None,
        supplier_id: str | None,
        priority: OrderPriority | None,
        expected_date: datetime | None,
        notes: str | None,
    ) -> tuple[OrderDTO, list[InventoryItem]]:
        now = datetime.now(timezone.utc)
        with self._uow as uow:
            if uow.locations.get_by_id(location_id) is None:
                raise EntityNotFoundError(f"Location '{location_id}' not found")
            if customer_id and uow.customers.get_by_id(customer_id) is None:
                raise EntityNotFoundError(f"Customer '{customer_id}' not found")
            if supplier_id and uow.suppliers.get_by_id(supplier_id) is None:
                raise EntityNotFoundError(f"Supplier '{supplier_id}' not found")

            line_items: list[OrderLineItem] = []
            for spec in items:
                product = uow.products.get_by_id(spec.product_id)
                if product is None:
                    raise EntityNotFoundError(f"Product '{spec.product_id}' not found")
                price = (
                    Money.of(spec.unit_price)
                    if spec.unit_price is not None
                    else product.unit_price
                )
                line_items.append(
                    OrderLineItem(
                        product_id=product.id,
                        product_name=product.name,
                        quantity=Quantity(spec.quantity),
                        unit_price=price,
                    )
                )

            order = Order.create(
                order_type=order_type,
                location_id=location_id,
                items=line_items,
                order_number=self._generate_number(),
                customer_id=customer_id,
                supplier_id=supplier_id,
                priority=priority,
                expected_date=expected_date,
                notes=notes,
            )
            order.created_at = order.updated_at = now
            uow.orders.add(order)

            reserved: list[InventoryItem] = []
            if order.order_type == OrderType.SALES:
                svc = InventoryReservationService(uow.inventory)
                reserved = svc.reserve_for_order(order, now)

            dto = to_order_dto(order)
            uow.commit()
        return dto, reserved
