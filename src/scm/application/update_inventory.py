"""Application service: Update Inventory use case.

Changes a row's reorder point.  Quantities only move through
adjustments and order workflows.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from scm.application import notifications
from scm.application.dto import InventoryDTO, to_inventory_dto
from scm.application.notifications import NotificationSink, NullNotificationSink, broadcast
from scm.domain.exceptions import EntityNotFoundError
from scm.domain.repository.unit_of_work import UnitOfWork
from scm.domain.service.stock_policy import StockPolicy

logger = structlog.get_logger(__name__)


class UpdateInventoryHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: NotificationSink | None = None,
        policy: StockPolicy | None = None,
    ) -> None:
        self._uow = uow
        self._notifier = notifier or NullNotificationSink()
        self._policy = policy or StockPolicy()

    def handle(self, inventory_id: str, reorder_point: int) -> InventoryDTO:
        now = datetime.now(timezone.utc)
        with self._uow as uow:
            inv = uow.inventory.get_for_update(inventory_id)
            if inv is None:
                raise EntityNotFoundError(f"Inventory item '{inventory_id}' not found")
            inv.set_reorder_point(reorder_point, now)
            uow.inventory.save(inv)
            dto = to_inventory_dto(inv)
            uow.commit()

        logger.info("Inventory updated", inventory_id=inv.id, reorder_point=reorder_point)
        broadcast(
            self._notifier,
            notifications.INVENTORY_UPDATE,
            notifications.inventory_payload("inventory-updated", dto),
            notifications.warehouse_topic(inv.location_id),
        )
        if self._policy.needs_reorder(inv):
            broadcast(
                self._notifier,
                notifications.LOW_STOCK_ALERT,
                notifications.low_stock_payload(inv),
                notifications.warehouse_topic(inv.location_id),
            )
        return dto
