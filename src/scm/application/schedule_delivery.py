"""Application service: Schedule Delivery use case.

A delivery can only be scheduled for a SHIPPED order; it leaves from the
order's location.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime

import structlog

from scm.application import notifications
from scm.application.dto import DeliveryDTO, to_delivery_dto
from scm.application.notifications import NotificationSink, NullNotificationSink, broadcast
from scm.domain.exceptions import EntityNotFoundError, InvalidStateError
from scm.domain.model.delivery import Delivery
from scm.domain.model.order import OrderStatus
from scm.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class ScheduleDeliveryHandler:

    def __init__(self, uow: UnitOfWork, notifier: NotificationSink | None = None) -> None:
        self._uow = uow
        self._notifier = notifier or NullNotificationSink()

    def handle(
        self,
        order_id: str,
        scheduled_date: datetime | None = None,
        driver: str | None = None,
        tracking_number: str | None = None,
    ) -> DeliveryDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order '{order_id}' not found")
            if order.status != OrderStatus.SHIPPED:
                raise InvalidStateError(
                    f"Order {order.order_number} must be SHIPPED to schedule a delivery, "
                    f"current status is {order.status.value}",
                    current_status=order.status.value,
                )
            delivery = Delivery.schedule(
                order_id=order.id,
                from_location_id=order.location_id,
                scheduled_date=scheduled_date,
                driver=driver,
                tracking_number=tracking_number,
            )
            uow.deliveries.add(delivery)
            dto = to_delivery_dto(delivery)
            uow.commit()

        logger.info("Delivery scheduled", delivery_id=dto.id, order_id=order_id)
        broadcast(
            self._notifier,
            notifications.DELIVERY_UPDATE,
            {"type": "delivery-scheduled", "data": asdict(dto)},
            notifications.delivery_topic(dto.id),
        )
        return dto
