"""Application service: Create Inventory use case.

Starts stocking a product at a location.  Each (product, location) pair
has at most one record.
"""

from __future__ import annotations

import structlog

from scm.application import notifications
from scm.application.dto import InventoryDTO, to_inventory_dto
from scm.application.notifications import NotificationSink, NullNotificationSink, broadcast
from scm.domain.exceptions import EntityNotFoundError, ValidationError
from scm.domain.model.inventory import DEFAULT_REORDER_POINT, InventoryItem
from scm.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class CreateInventoryHandler:

    def __init__(
        self,
        uow: UnitOfWork,
        notifier: NotificationSink | None = None,
        default_reorder_point: int = DEFAULT_REORDER_POINT,
    ) -> None:
        self._uow = uow
        self._notifier = notifier or NullNotificationSink()
        self._default_reorder_point = default_reorder_point

    def handle(
        self,
        product_id: str,
        location_id: str,
        quantity: int,
        reorder_point: int | None = None,
    ) -> InventoryDTO:
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            location = uow.locations.get_by_id(location_id)
            if location is None:
                raise EntityNotFoundError(f"Location '{location_id}' not found")
            if uow.inventory.exists(product_id, location_id):
                raise ValidationError(
                    f"Inventory already exists for {product.name} at {location.name}"
                )

            item = InventoryItem.create(
                product_id=product_id,
                location_id=location_id,
                quantity=quantity,
                reorder_point=(
                    self._default_reorder_point if reorder_point is None else reorder_point
                ),
                product_name=product.name,
                location_name=location.name,
            )
            uow.inventory.add(item)
            dto = to_inventory_dto(item)
            uow.commit()

        logger.info(
            "Inventory created",
            inventory_id=dto.id,
            product_id=product_id,
            location_id=location_id,
            quantity=quantity,
        )
        broadcast(
            self._notifier,
            notifications.INVENTORY_UPDATE,
            notifications.inventory_payload("inventory-created", dto),
            notifications.warehouse_topic(location_id),
        )
        return dto
