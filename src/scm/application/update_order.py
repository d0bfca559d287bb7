"""Application service: Update Order use case.

Edits priority, expected date and notes.  Status changes go through the
lifecycle handlers; items and total never change after creation.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone

import structlog

from scm.application import notifications
from scm.application.dto import OrderDTO, to_order_dto
from scm.application.notifications import NotificationSink, NullNotificationSink, broadcast
from scm.application.queries import parse_enum
from scm.domain.exceptions import EntityNotFoundError, ValidationError
from scm.domain.model.order import OrderPriority
from scm.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateOrderHandler:

    def __init__(self, uow: UnitOfWork, notifier: NotificationSink | None = None) -> None:
        self._uow = uow
        self._notifier = notifier or NullNotificationSink()

    def handle(
        self,
        order_id: str,
        priority: OrderPriority | str | None = None,
        expected_date: datetime | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        if priority is None and expected_date is None and notes is None:
            raise ValidationError("Nothing to update")
        priority = parse_enum(OrderPriority, priority, "priority")

        now = datetime.now(timezone.utc)
        with self._uow as uow:
            order = uow.orders.get_for_update(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order '{order_id}' not found")
            order.update_details(priority, expected_date, notes, now)
            uow.orders.save(order)
            dto = to_order_dto(order)
            uow.commit()

        logger.info(
            "Order updated",
            order_id=dto.id,
            order_number=dto.order_number,
            priority=dto.priority,
        )
        broadcast(
            self._notifier,
            notifications.ORDER_UPDATED,
            {"type": notifications.ORDER_UPDATED, "data": asdict(dto)},
        )
        return dto
