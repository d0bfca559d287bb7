"""Application service: Cancel Order use case.

A SALES order that still holds its reservation (PENDING, CONFIRMED or
PROCESSING) gives it back.  Cancelling never changes on-hand quantity;
only fulfillment moves physical stock.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from scm.application import notifications
from scm.application.dto import OrderDTO, to_order_dto
from scm.application.notifications import NotificationSink, NullNotificationSink, broadcast
from scm.domain.exceptions import DomainException, EntityNotFoundError, ValidationError
from scm.domain.repository.unit_of_work import UnitOfWork
from scm.domain.service.inventory_reservation_service import InventoryReservationService

logger = structlog.get_logger(__name__)


class CancelOrderHandler:

    def __init__(self, uow: UnitOfWork, notifier: NotificationSink | None = None) -> None:
        self._uow = uow
        self._notifier = notifier or NullNotificationSink()

    def handle(self, order_id: str, reason: str) -> OrderDTO:
        if not reason or not reason.strip():
            raise ValidationError("A cancellation reason is required")
        reason = reason.strip()

        now = datetime.now(timezone.utc)
        try:
            with self._uow as uow:
                order = uow.orders.get_for_update(order_id)
                if order is None:
                    raise EntityNotFoundError(f"Order '{order_id}' not found")

                held = order.holds_reservation
                order.cancel(reason, now)
                released = []
                if held:
                    svc = InventoryReservationService(uow.inventory)
                    released = svc.release_for_order(order, now)
                uow.orders.save(order)

                dto = to_order_dto(order)
                uow.commit()
        except DomainException as exc:
            logger.warning(
                "Order cancellation rejected",
                order_id=order_id,
                error=type(exc).__name__,
                reason=str(exc),
            )
            raise

        logger.info(
            "Order cancelled",
            order_id=order.id,
            order_number=order.order_number,
            released_rows=len(released),
        )
        broadcast(
            self._notifier,
            notifications.ORDER_CANCELLED,
            {
                "type": notifications.ORDER_CANCELLED,
                "orderId": order.id,
                "orderNumber": order.order_number,
                "reason": reason,
            },
        )
        if released:
            broadcast(
                self._notifier,
                notifications.INVENTORY_UPDATE,
                {"type": "reservation-released", "orderId": order.id},
                notifications.warehouse_topic(order.location_id),
            )
        return dto
