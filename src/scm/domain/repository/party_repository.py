"""Abstract repositories for order counterparties."""

from __future__ import annotations

from abc import ABC, abstractmethod

from scm.domain.model.party import Customer, Supplier


class CustomerRepository(ABC):

    @abstractmethod
    def get_by_id(self, customer_id: str) -> Customer | None: ...

    @abstractmethod
    def get_by_email(self, email: str) -> Customer | None: ...

    @abstractmethod
    def list_all(self) -> list[Customer]: ...

    @abstractmethod
    def add(self, customer: Customer) -> None: ...


class SupplierRepository(ABC):

    @abstractmethod
    def get_by_id(self, supplier_id: str) -> Supplier | None: ...

    @abstractmethod
    def list_all(self) -> list[Supplier]: ...

    @abstractmethod
    def add(self, supplier: Supplier) -> None: ...
