"""Application service: Add Product use case."""

from __future__ import annotations

from scm.domain.exceptions import ValidationError
from scm.domain.model.product import Product
from scm.domain.model.value_objects import Money
from scm.domain.repository.unit_of_work import UnitOfWork


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, sku: str, name: str, unit_price: str) -> Product:
        """Add a new product to the catalog."""
        product = Product.create(sku=sku, name=name, unit_price=Money.of(unit_price))
        with self._uow as uow:
            if uow.products.get_by_sku(product.sku) is not None:
                raise ValidationError(f"Product with SKU '{product.sku}' already exists")
            uow.products.add(product)
            uow.commit()
        return product
