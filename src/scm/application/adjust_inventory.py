"""Application service: Adjust Inventory use case.

Applies a signed correction to on-hand stock (cycle counts, damage,
found stock).  The row is locked for the read-modify-write.
"""

from __future__ import annotations

from datetime import datetime, timezone

import structlog

from scm.application import notifications
from scm.application.dto import InventoryDTO, to_inventory_dto
from scm.application.notifications import NotificationSink, NullNotificationSink, broadcast
from scm.domain.exceptions import DomainException, EntityNotFoundError, ValidationError
from scm.domain.repository.unit_of_work import UnitOfWork
from scm.domain.service.stock_policy import StockPolicy

logger = structlog.get_logger(__name__)


class AdjustInventoryHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: NotificationSink | None = None,
        policy: StockPolicy | None = None,
    ) -> None:
        self._uow = uow
        self._notifier = notifier or NullNotificationSink()
        self._policy = policy or StockPolicy()

    def handle(self, inventory_id: str, adjustment: int, reason: str = "") -> InventoryDTO:
        if not isinstance(adjustment, int) or isinstance(adjustment, bool) or adjustment == 0:
            raise ValidationError("A non-zero integer adjustment is required")

        now = datetime.now(timezone.utc)
        try:
            with self._uow as uow:
                inv = uow.inventory.get_for_update(inventory_id)
                if inv is None:
                    raise EntityNotFoundError(f"Inventory item '{inventory_id}' not found")

                previous = inv.adjust(adjustment, now)
                uow.inventory.save(inv)

                dto = to_inventory_dto(inv)
                uow.commit()
        except DomainException as exc:
            logger.warning(
                "Inventory adjustment rejected",
                inventory_id=inventory_id,
                adjustment=adjustment,
                error=type(exc).__name__,
                reason=str(exc),
            )
            raise

        logger.info(
            "Inventory adjusted",
            inventory_id=inv.id,
            previous_quantity=previous,
            quantity=inv.quantity,
            adjustment=adjustment,
            reason=reason,
        )
        broadcast(
            self._notifier,
            notifications.INVENTORY_UPDATE,
            notifications.inventory_payload(
                "inventory-adjusted",
                dto,
                adjustment=adjustment,
                reason=reason,
                previousQuantity=previous,
            ),
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
