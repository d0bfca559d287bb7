"""InventoryItem aggregate — on-hand stock and reservations per (product, location).

Invariants:
- ``quantity`` is never negative
- ``reserved_quantity`` is never negative and never exceeds ``quantity``

Every mutator stamps ``last_updated``.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from scm.domain.exceptions import InsufficientStockError, ValidationError

DEFAULT_REORDER_POINT = 50


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class InventoryItem:
    """Stock of one product held at one location."""

    id: str
    product_id: str
    location_id: str
    quantity: int
    reserved_quantity: int = 0
    reorder_point: int = DEFAULT_REORDER_POINT
    product_name: str = ""
    location_name: str = ""
    last_updated: datetime = field(default_factory=_utcnow)

    @staticmethod
    def create(
        product_id: str,
        location_id: str,
        quantity: int,
        reorder_point: int = DEFAULT_REORDER_POINT,
        product_name: str = "",
        location_name: str = "",
    ) -> InventoryItem:
        if quantity < 0:
            raise ValidationError("Inventory quantity cannot be negative")
        if reorder_point < 0:
            raise ValidationError("Reorder point cannot be negative")
        return InventoryItem(
            id=str(uuid.uuid4()),
            product_id=product_id,
            location_id=location_id,
            quantity=quantity,
            reorder_point=reorder_point,
            product_name=product_name,
            location_name=location_name,
        )

    @property
    def available_quantity(self) -> int:
        return self.quantity - self.reserved_quantity

    @property
    def label(self) -> str:
        return self.product_name or self.product_id

    def reserve(self, qty: int, now: datetime | None = None) -> None:
        """Earmark *qty* units for an open SALES order."""
        if qty <= 0:
            raise ValidationError("Reservation quantity must be positive")
        if qty > self.available_quantity:
            raise InsufficientStockError(
                f"Insufficient stock for {self.label} "
                f"(need {qty}, have {self.available_quantity} available)",
                product_id=self.product_id,
                inventory_id=self.id,
            )
        self.reserved_quantity += qty
        self._touch(now)

    def release(self, qty: int, now: datetime | None = None) -> None:
        """Give back a reservation, floored at zero."""
        if qty <= 0:
            raise ValidationError("Release quantity must be positive")
        self.reserved_quantity = max(0, self.reserved_quantity - qty)
        self._touch(now)

    def ship(self, qty: int, now: datetime | None = None) -> None:
        """Remove *qty* shipped units from stock and consume their reservation.

        The reservation is floored at zero even if it was already short.
        """
        if qty <= 0:
            raise ValidationError("Ship quantity must be positive")
        if qty > self.quantity:
            raise InsufficientStockError(
                f"Cannot ship {qty} of {self.label} — only {self.quantity} on hand",
                product_id=self.product_id,
                inventory_id=self.id,
            )
        self.quantity -= qty
        self.reserved_quantity = min(max(0, self.reserved_quantity - qty), self.quantity)
        self._touch(now)

    def receive(self, qty: int, now: datetime | None = None) -> None:
        """Add inbound stock."""
        if qty <= 0:
            raise ValidationError("Receive quantity must be positive")
        self.quantity += qty
        self._touch(now)

    def adjust(self, delta: int, now: datetime | None = None) -> int:
        """Apply a signed correction and return the previous quantity."""
        previous = self.quantity
        new_quantity = previous + delta
        if new_quantity < 0:
            raise InsufficientStockError(
                f"Insufficient stock for this adjustment: {self.label} has "
                f"{previous}, adjustment is {delta}",
                product_id=self.product_id,
                inventory_id=self.id,
            )
        if new_quantity < self.reserved_quantity:
            raise InsufficientStockError(
                f"Adjustment would leave {new_quantity} of {self.label} on hand "
                f"but {self.reserved_quantity} are reserved",
                product_id=self.product_id,
                inventory_id=self.id,
            )
        self.quantity = new_quantity
        self._touch(now)
        return previous

    def set_reorder_point(self, reorder_point: int, now: datetime | None = None) -> None:
        if (
            not isinstance(reorder_point, int)
            or isinstance(reorder_point, bool)
            or reorder_point < 0
        ):
            raise ValidationError("Reorder point must be a non-negative integer")
        self.reorder_point = reorder_point
        self._touch(now)

    def _touch(self, now: datetime | None) -> None:
        self.last_updated = now or _utcnow()
