"""SQLAlchemy implementation of ProductRepository."""

from __future__ import annotations

from sqlalchemy.orm import Session

from scm.domain.model.product import Product
from scm.domain.model.value_objects import Money
from scm.domain.repository.product_repository import ProductRepository
from scm.infrastructure.persistence.orm import ProductRow


class SqlProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, product_id: str) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        return self._to_domain(row) if row else None

    def get_by_sku(self, sku: str) -> Product | None:
        row = self._session.query(ProductRow).filter(ProductRow.sku == sku.strip().upper()).first()
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Product]:
        return [self._to_domain(r) for r in self._session.query(ProductRow).order_by(ProductRow.sku)]

    def add(self, product: Product) -> None:
        self._session.add(
            ProductRow(
                id=product.id,
                sku=product.sku,
                name=product.name,
                unit_price=product.unit_price.amount,
            )
        )
        self._session.flush()

    def save(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id)
        row.name = product.name
        row.unit_price = product.unit_price.amount
        self._session.flush()

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(id=row.id, sku=row.sku, name=row.name, unit_price=Money.of(row.unit_price))
