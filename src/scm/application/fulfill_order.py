"""Application service: Fulfill (ship) Order use case.

Moves a CONFIRMED or PROCESSING order to SHIPPED and applies its stock
movement in one transaction: PURCHASE orders add inbound stock, SALES
orders remove shipped stock and consume their reservation.

Calling it twice is rejected by the status precondition; there is no
separate de-duplication.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from scm.application import notifications
from scm.application.dto import OrderDTO, to_order_dto
from scm.application.notifications import NotificationSink, NullNotificationSink, broadcast
from scm.domain.exceptions import DomainException, EntityNotFoundError
from scm.domain.model.inventory import DEFAULT_REORDER_POINT
from scm.domain.model.order import OrderType
from scm.domain.repository.unit_of_work import UnitOfWork
from scm.domain.service.inventory_reservation_service import InventoryReservationService
from scm.domain.service.stock_policy import StockPolicy

logger = structlog.get_logger(__name__)


class FulfillOrderHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: NotificationSink | None = None,
        policy: StockPolicy | None = None,
        default_reorder_point: int = DEFAULT_REORDER_POINT,
    ) -> None:
        self._uow = uow
        self._notifier = notifier or NullNotificationSink()
        self._policy = policy or StockPolicy()
        self._default_reorder_point = default_reorder_point

    def handle(self, order_id: str) -> OrderDTO:
        now = datetime.now(timezone.utc)
        try:
            with self._uow as uow:
                order = uow.orders.get_for_update(order_id)
                if order is None:
                    raise EntityNotFoundError(f"Order '{order_id}' not found")

                order.mark_shipped(now)
                svc = InventoryReservationService(uow.inventory, self._default_reorder_point)
                touched = svc.ship_for_order(order, now)
                uow.orders.save(order)

                dto = to_order_dto(order)
                uow.commit()
        except DomainException as exc:
            logger.warning(
                "Order fulfillment rejected",
                order_id=order_id,
                error=type(exc).__name__,
                reason=str(exc),
            )
            raise

        logger.info(
            "Order fulfilled",
            order_id=order.id,
            order_number=order.order_number,
            order_type=order.order_type.value,
            inventory_rows=len(touched),
        )
        broadcast(
            self._notifier,
            notifications.ORDER_FULFILLED,
            {
                "type": notifications.ORDER_FULFILLED,
                "orderId": order.id,
                "orderNumber": order.order_number,
            },
        )
        broadcast(
            self._notifier,
            notifications.INVENTORY_UPDATE,
            {"type": notifications.ORDER_FULFILLED, "orderId": order.id},
            notifications.warehouse_topic(order.location_id),
        )
        if order.order_type == OrderType.SALES:
            for inv in touched:
                if self._policy.needs_reorder(inv):
                    broadcast(
                        self._notifier,
                        notifications.LOW_STOCK_ALERT,
                        notifications.low_stock_payload(inv),
                        notifications.warehouse_topic(inv.location_id),
                    )
        return dto
