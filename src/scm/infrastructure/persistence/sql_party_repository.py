"""SQLAlchemy implementations of the counterparty repositories."""

from __future__ import annotations

from sqlalchemy.orm import Session

from scm.domain.model.party import Customer, Supplier
from scm.domain.repository.party_repository import CustomerRepository, SupplierRepository
from scm.infrastructure.persistence.orm import CustomerRow, SupplierRow


class SqlCustomerRepository(CustomerRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, customer_id: str) -> Customer | None:
        row = self._session.get(CustomerRow, customer_id)
        return Customer(id=row.id, name=row.name, email=row.email) if row else None

    def get_by_email(self, email: str) -> Customer | None:
        row = (
            self._session.query(CustomerRow)
            .filter(CustomerRow.email == email.strip().lower())
            .first()
        )
        return Customer(id=row.id, name=row.name, email=row.email) if row else None

    def list_all(self) -> list[Customer]:
        rows = self._session.query(CustomerRow).order_by(CustomerRow.name)
        return [Customer(id=r.id, name=r.name, email=r.email) for r in rows]

    def add(self, customer: Customer) -> None:
        self._session.add(CustomerRow(id=customer.id, name=customer.name, email=customer.email))
        self._session.flush()


class SqlSupplierRepository(SupplierRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, supplier_id: str) -> Supplier | None:
        row = self._session.get(SupplierRow, supplier_id)
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Supplier]:
        rows = self._session.query(SupplierRow).order_by(SupplierRow.name)
        return [self._to_domain(r) for r in rows]

    def add(self, supplier: Supplier) -> None:
        self._session.add(
            SupplierRow(
                id=supplier.id,
                name=supplier.name,
                email=supplier.email,
                contact_name=supplier.contact_name,
            )
        )
        self._session.flush()

    @staticmethod
    def _to_domain(row: SupplierRow) -> Supplier:
        return Supplier(id=row.id, name=row.name, email=row.email, contact_name=row.contact_name)
