"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from scm.domain.model.order import Order
from scm.domain.repository.filters import OrderFilter, Page


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: str) -> Order | None:
        """Return an order with its items, or None if not found."""

    @abstractmethod
    def get_for_update(self, order_id: str) -> Order | None:
        """Return an order locked for the rest of the transaction."""

    @abstractmethod
    def list(self, flt: OrderFilter) -> Page[Order]:
        """Return one page of orders matching the filter, newest first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Persist a new order together with its line items."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist header changes (status, dates, notes) of an existing order."""
