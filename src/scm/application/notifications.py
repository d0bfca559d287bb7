"""Notification port — how use cases announce committed changes.

Delivery is best effort: ``broadcast`` never lets a sink failure reach
the caller, because the owning transaction has already committed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict
from typing import Any

import structlog

from scm.application.dto import InventoryDTO
from scm.domain.model.inventory import InventoryItem

logger = structlog.get_logger(__name__)

ORDER_CREATED = "order-created"
ORDER_UPDATED = "order-updated"
ORDER_FULFILLED = "order-fulfilled"
ORDER_CANCELLED = "order-cancelled"
INVENTORY_UPDATE = "inventory-update"
LOW_STOCK_ALERT = "low-stock-alert"
DELIVERY_UPDATE = "delivery-update"

GLOBAL_TOPIC = "global"


def warehouse_topic(location_id: str) -> str:
    return f"warehouse-{location_id}"


def delivery_topic(delivery_id: str) -> str:
    return f"delivery-{delivery_id}"


class NotificationSink(ABC):

    @abstractmethod
    def publish(self, event: str, payload: dict[str, Any], topic: str = GLOBAL_TOPIC) -> None:
        """Deliver *payload* to every subscriber of *topic*."""


class NullNotificationSink(NotificationSink):
    """Discards everything. Used when no channel is wired."""

    def publish(self, event: str, payload: dict[str, Any], topic: str = GLOBAL_TOPIC) -> None:
        return None


def broadcast(
    sink: NotificationSink,
    event: str,
    payload: dict[str, Any],
    topic: str = GLOBAL_TOPIC,
) -> bool:
    """Publish once; log and swallow any failure. Returns True on success."""
    try:
        sink.publish(event, payload, topic)
    except Exception:
        logger.warning(
            "Notification delivery failed", notification=event, topic=topic, exc_info=True
        )
        return False
    return True


def inventory_payload(update_type: str, dto: InventoryDTO, **extra: Any) -> dict[str, Any]:
    return {"type": update_type, "data": asdict(dto), **extra}


def low_stock_payload(item: InventoryItem) -> dict[str, Any]:
    return {
        "inventoryId": item.id,
        "productName": item.product_name,
        "currentQuantity": item.quantity,
        "availableQuantity": item.available_quantity,
        "reorderPoint": item.reorder_point,
        "location": item.location_name,
    }
