"""Domain service: Inventory Reservation.

Coordinates the cross-aggregate effect of an order's lifecycle on
inventory: reserving stock when a SALES order is created, releasing it on
cancellation, and moving physical stock when an order ships.

Every method must run inside a Unit of Work.  Rows are loaded with
``find_for_update`` so concurrent transactions against the same
(product, location) serialize on the row lock.
"""

from __future__ import annotations

from datetime import datetime

from scm.domain.exceptions import EntityNotFoundError, InsufficientStockError
from scm.domain.model.inventory import DEFAULT_REORDER_POINT, InventoryItem
from scm.domain.model.order import Order, OrderType
from scm.domain.repository.inventory_repository import InventoryRepository


def quantities_by_product(order: Order) -> dict[str, int]:
    """Sum line quantities per product, keeping first-seen order."""
    totals: dict[str, int] = {}
    for line in order.items:
        totals[line.product_id] = totals.get(line.product_id, 0) + line.quantity.value
    return totals


class InventoryReservationService:

    def __init__(
        self,
        inventory_repo: InventoryRepository,
        default_reorder_point: int = DEFAULT_REORDER_POINT,
    ) -> None:
        self._inventory_repo = inventory_repo
        self._default_reorder_point = default_reorder_point

    def reserve_for_order(self, order: Order, now: datetime | None = None) -> list[InventoryItem]:
        """Reserve stock at the order's location for every product on the order.

        Uses a two-phase approach:
          Phase 1 — lock and validate every row.  Fails before any mutation
                    if a product is not stocked or lacks unreserved units.
          Phase 2 — reserve and persist.
        """
        locked: list[tuple[InventoryItem, int]] = []
        for product_id, qty in quantities_by_product(order).items():
            inv = self._inventory_repo.find_for_update(product_id, order.location_id)
            if inv is None:
                raise InsufficientStockError(
                    f"Insufficient stock for product {product_id}: "
                    f"not stocked at location {order.location_id}",
                    product_id=product_id,
                )
            if qty > inv.available_quantity:
                raise InsufficientStockError(
                    f"Insufficient stock for product {inv.label} "
                    f"(need {qty}, have {inv.available_quantity} available)",
                    product_id=product_id,
                    inventory_id=inv.id,
                )
            locked.append((inv, qty))

        for inv, qty in locked:
            inv.reserve(qty, now)
            self._inventory_repo.save(inv)
        return [inv for inv, _ in locked]

    def release_for_order(self, order: Order, now: datetime | None = None) -> list[InventoryItem]:
        """Release the reservation a SALES order still holds.

        Products no longer stocked at the location have nothing to release.
        """
        touched: list[InventoryItem] = []
        for product_id, qty in quantities_by_product(order).items():
            inv = self._inventory_repo.find_for_update(product_id, order.location_id)
            if inv is None:
                continue
            inv.release(qty, now)
            self._inventory_repo.save(inv)
            touched.append(inv)
        return touched

    def ship_for_order(self, order: Order, now: datetime | None = None) -> list[InventoryItem]:
        """Move physical stock for a shipped order.

        PURCHASE orders receive stock (creating the row if the product was
        not yet stocked at the location); SALES orders consume stock and
        their reservation.  TRANSFER and RETURN orders move nothing here.
        """
        if order.order_type == OrderType.PURCHASE:
            return [
                self._receive(product_id, order.location_id, qty, now)
                for product_id, qty in quantities_by_product(order).items()
            ]
        if order.order_type != OrderType.SALES:
            return []

        touched: list[InventoryItem] = []
        for product_id, qty in quantities_by_product(order).items():
            inv = self._inventory_repo.find_for_update(product_id, order.location_id)
            if inv is None:
                raise EntityNotFoundError(
                    f"No inventory record for product {product_id} "
                    f"at location {order.location_id}"
                )
            inv.ship(qty, now)
            self._inventory_repo.save(inv)
            touched.append(inv)
        return touched

    def _receive(
        self, product_id: str, location_id: str, qty: int, now: datetime | None
    ) -> InventoryItem:
        inv = self._inventory_repo.find_for_update(product_id, location_id)
        if inv is None:
            inv = InventoryItem.create(
                product_id=product_id,
                location_id=location_id,
                quantity=qty,
                reorder_point=self._default_reorder_point,
            )
            if now is not None:
                inv.last_updated = now
            self._inventory_repo.add(inv)
            return inv
        inv.receive(qty, now)
        self._inventory_repo.save(inv)
        return inv
