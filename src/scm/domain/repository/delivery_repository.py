"""Abstract repository for Delivery."""

from __future__ import annotations

from abc import ABC, abstractmethod

from scm.domain.model.delivery import Delivery


class DeliveryRepository(ABC):

    @abstractmethod
    def get_for_update(self, delivery_id: str) -> Delivery | None:
        """Return a delivery locked for the rest of the transaction."""

    @abstractmethod
    def list_for_order(self, order_id: str) -> list[Delivery]: ...

    @abstractmethod
    def add(self, delivery: Delivery) -> None: ...

    @abstractmethod
    def save(self, delivery: Delivery) -> None: ...
