"""Abstract repository for InventoryItem aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from scm.domain.model.inventory import InventoryItem
from scm.domain.repository.filters import InventoryFilter, Page


class InventoryRepository(ABC):

    @abstractmethod
    def get_by_id(self, inventory_id: str) -> InventoryItem | None:
        """Return an inventory record by id, or None."""

    @abstractmethod
    def get_for_update(self, inventory_id: str) -> InventoryItem | None:
        """Return an inventory record by id, locked for the rest of the transaction."""

    @abstractmethod
    def find_for_update(self, product_id: str, location_id: str) -> InventoryItem | None:
        """Return the (product, location) record locked for the rest of the
        transaction, or None when the product is not stocked there."""

    @abstractmethod
    def exists(self, product_id: str, location_id: str) -> bool:
        """True if the product already has a record at the location."""

    @abstractmethod
    def list(self, flt: InventoryFilter) -> Page[InventoryItem]:
        """Return one page of records matching the filter."""

    @abstractmethod
    def add(self, item: InventoryItem) -> None:
        """Persist a new inventory record."""

    @abstractmethod
    def save(self, item: InventoryItem) -> None:
        """Persist changes to an existing inventory record."""
