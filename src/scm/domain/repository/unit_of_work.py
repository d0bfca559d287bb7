"""Abstract Unit of Work — the transaction boundary of every use case.

Usage::

    with uow:
        order = uow.orders.get_for_update(order_id)
        ...
        uow.commit()

Leaving the block without ``commit()``, or through an exception, rolls
back every write made inside it.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from scm.domain.repository.delivery_repository import DeliveryRepository
from scm.domain.repository.inventory_repository import InventoryRepository
from scm.domain.repository.location_repository import LocationRepository
from scm.domain.repository.order_repository import OrderRepository
from scm.domain.repository.party_repository import CustomerRepository, SupplierRepository
from scm.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):
    orders: OrderRepository
    inventory: InventoryRepository
    products: ProductRepository
    locations: LocationRepository
    customers: CustomerRepository
    suppliers: SupplierRepository
    deliveries: DeliveryRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every write since the block was entered durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted write; a no-op after commit."""
