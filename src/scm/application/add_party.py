"""Application services: register customers and suppliers."""

from __future__ import annotations

from scm.domain.exceptions import ValidationError
from scm.domain.model.party import Customer, Supplier
from scm.domain.repository.unit_of_work import UnitOfWork


class AddCustomerHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, name: str, email: str) -> Customer:
        customer = Customer.create(name, email)
        with self._uow as uow:
            if uow.customers.get_by_email(customer.email) is not None:
                raise ValidationError(f"Customer with email '{customer.email}' already exists")
            uow.customers.add(customer)
            uow.commit()
        return customer


class AddSupplierHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, name: str, email: str | None = None, contact_name: str | None = None
    ) -> Supplier:
        supplier = Supplier.create(name, email, contact_name)
        with self._uow as uow:
            uow.suppliers.add(supplier)
            uow.commit()
        return supplier
