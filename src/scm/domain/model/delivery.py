"""Delivery — physical transit of a shipped order.

Completing a delivery is the event that moves its order to DELIVERED.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from scm.domain.exceptions import InvalidStateError


class DeliveryStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_TRANSIT = "IN_TRANSIT"
    DELIVERED = "DELIVERED"
    FAILED = "FAILED"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Delivery:
    id: str
    order_id: str
    from_location_id: str
    status: DeliveryStatus = DeliveryStatus.SCHEDULED
    scheduled_date: datetime = field(default_factory=_utcnow)
    delivered_date: datetime | None = None
    driver: str | None = None
    tracking_number: str | None = None
    notes: str | None = None

    @staticmethod
    def schedule(
        order_id: str,
        from_location_id: str,
        scheduled_date: datetime | None = None,
        driver: str | None = None,
        tracking_number: str | None = None,
    ) -> Delivery:
        return Delivery(
            id=str(uuid.uuid4()),
            order_id=order_id,
            from_location_id=from_location_id,
            scheduled_date=scheduled_date or _utcnow(),
            driver=driver,
            tracking_number=tracking_number,
        )

    @property
    def is_open(self) -> bool:
        return self.status in (DeliveryStatus.SCHEDULED, DeliveryStatus.IN_TRANSIT)

    def dispatch(self) -> None:
        if self.status != DeliveryStatus.SCHEDULED:
            raise InvalidStateError(
                f"Cannot dispatch delivery {self.id} with status {self.status.value}",
                current_status=self.status.value,
            )
        self.status = DeliveryStatus.IN_TRANSIT

    def complete(self, now: datetime | None = None) -> None:
        self._require_open("complete")
        self.status = DeliveryStatus.DELIVERED
        self.delivered_date = now or _utcnow()

    def fail(self, reason: str) -> None:
        self._require_open("fail")
        self.status = DeliveryStatus.FAILED
        self.notes = f"{self.notes}\nFailed: {reason}" if self.notes else f"Failed: {reason}"

    def _require_open(self, action: str) -> None:
        if not self.is_open:
            raise InvalidStateError(
                f"Cannot {action} delivery {self.id} with status {self.status.value}",
                current_status=self.status.value,
            )
