"""Application services: delivery progress (dispatch, complete, fail).

Completing a delivery is the only path that moves an order to DELIVERED;
both rows change in one transaction.
"""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone

import structlog

from scm.application import notifications
from scm.application.dto import DeliveryDTO, to_delivery_dto, to_order_dto
from scm.application.notifications import NotificationSink, NullNotificationSink, broadcast
from scm.domain.exceptions import EntityNotFoundError, ValidationError
from scm.domain.model.delivery import Delivery
from scm.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


def _load(uow: UnitOfWork, delivery_id: str) -> Delivery:
    delivery = uow.deliveries.get_for_update(delivery_id)
    if delivery is None:
        raise EntityNotFoundError(f"Delivery '{delivery_id}' not found")
    return delivery


class _DeliveryHandler:

    def __init__(self, uow: UnitOfWork, notifier: NotificationSink | None = None) -> None:
        self._uow = uow
        self._notifier = notifier or NullNotificationSink()

    def _announce(self, update_type: str, dto: DeliveryDTO) -> None:
        broadcast(
            self._notifier,
            notifications.DELIVERY_UPDATE,
            {"type": update_type, "data": asdict(dto)},
            notifications.delivery_topic(dto.id),
        )


class DispatchDeliveryHandler(_DeliveryHandler):

    def handle(self, delivery_id: str) -> DeliveryDTO:
        with self._uow as uow:
            delivery = _load(uow, delivery_id)
            delivery.dispatch()
            uow.deliveries.save(delivery)
            dto = to_delivery_dto(delivery)
            uow.commit()

        logger.info("Delivery dispatched", delivery_id=delivery_id)
        self._announce("delivery-dispatched", dto)
        return dto


class CompleteDeliveryHandler(_DeliveryHandler):

    def handle(self, delivery_id: str) -> DeliveryDTO:
        now = datetime.now(timezone.utc)
        with self._uow as uow:
            delivery = _load(uow, delivery_id)
            order = uow.orders.get_for_update(delivery.order_id)
            if order is None:
                raise EntityNotFoundError(f"Order '{delivery.order_id}' not found")

            delivery.complete(now)
            order.mark_delivered(now)
            uow.deliveries.save(delivery)
            uow.orders.save(order)

            dto = to_delivery_dto(delivery)
            order_dto = to_order_dto(order)
            uow.commit()

        logger.info(
            "Delivery completed",
            delivery_id=delivery_id,
            order_id=order_dto.id,
            order_number=order_dto.order_number,
        )
        self._announce("delivery-completed", dto)
        broadcast(
            self._notifier,
            notifications.ORDER_UPDATED,
            {"type": notifications.ORDER_UPDATED, "data": asdict(order_dto)},
        )
        return dto


class FailDeliveryHandler(_DeliveryHandler):

    def handle(self, delivery_id: str, reason: str) -> DeliveryDTO:
        if not reason or not reason.strip():
            raise ValidationError("A failure reason is required")

        with self._uow as uow:
            delivery = _load(uow, delivery_id)
            delivery.fail(reason.strip())
            uow.deliveries.save(delivery)
            dto = to_delivery_dto(delivery)
            uow.commit()

        logger.warning("Delivery failed", delivery_id=delivery_id, reason=reason)
        self._announce("delivery-failed", dto)
        return dto
