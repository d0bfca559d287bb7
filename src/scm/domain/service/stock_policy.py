"""Low-stock rules shared by every code path that raises stock alerts."""

from __future__ import annotations

from dataclasses import dataclass

from scm.domain.model.inventory import InventoryItem


@dataclass(frozen=True)
class StockPolicy:
    """Alerts compare against each row's own reorder point.

    ``low_stock_threshold`` only widens the low-stock listing: a row is
    listed when its quantity is at or below its reorder point or at or
    below the threshold.
    """

    low_stock_threshold: int = 10

    def needs_reorder(self, item: InventoryItem) -> bool:
        return item.quantity <= item.reorder_point

    def available_below_reorder(self, item: InventoryItem) -> bool:
        """Unreserved quantity is at or below the reorder point."""
        return item.available_quantity <= item.reorder_point
