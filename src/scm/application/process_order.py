"""Application service: Start Processing use case (CONFIRMED -> PROCESSING)."""

from __future__ import annotations

from dataclasses import asdict

import structlog

from scm.application import notifications
from scm.application.dto import OrderDTO, to_order_dto
from scm.application.notifications import NotificationSink, NullNotificationSink, broadcast
from scm.domain.exceptions import EntityNotFoundError
from scm.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class StartProcessingHandler:

    def __init__(self, uow: UnitOfWork, notifier: NotificationSink | None = None) -> None:
        self._uow = uow
        self._notifier = notifier or NullNotificationSink()

    def handle(self, order_id: str) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_for_update(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order '{order_id}' not found")
            order.start_processing()
            uow.orders.save(order)
            dto = to_order_dto(order)
            uow.commit()

        logger.info("Order processing started", order_id=dto.id, order_number=dto.order_number)
        broadcast(
            self._notifier,
            notifications.ORDER_UPDATED,
            {"type": notifications.ORDER_UPDATED, "data": asdict(dto)},
        )
        return dto
