"""Application service: Return Order use case (DELIVERED -> RETURNED).

Records the return only.  Returned goods re-enter stock through a RETURN
order or an inventory adjustment.
"""

from __future__ import annotations

from dataclasses import asdict

import structlog

from scm.application import notifications
from scm.application.dto import OrderDTO, to_order_dto
from scm.application.notifications import NotificationSink, NullNotificationSink, broadcast
from scm.domain.exceptions import EntityNotFoundError, ValidationError
from scm.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class ReturnOrderHandler:

    def __init__(self, uow: UnitOfWork, notifier: NotificationSink | None = None) -> None:
        self._uow = uow
        self._notifier = notifier or NullNotificationSink()

    def handle(self, order_id: str, reason: str) -> OrderDTO:
        if not reason or not reason.strip():
            raise ValidationError("A return reason is required")

        with self._uow as uow:
            order = uow.orders.get_for_update(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order '{order_id}' not found")
            order.mark_returned(reason.strip())
            uow.orders.save(order)
            dto = to_order_dto(order)
            uow.commit()

        logger.info("Order returned", order_id=dto.id, order_number=dto.order_number)
        broadcast(
            self._notifier,
            notifications.ORDER_UPDATED,
            {"type": notifications.ORDER_UPDATED, "data": asdict(dto)},
        )
        return dto
