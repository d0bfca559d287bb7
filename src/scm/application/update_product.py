"""Application service: Update Product use case."""

from __future__ import annotations

from scm.domain.exceptions import EntityNotFoundError
from scm.domain.model.product import Product
from scm.domain.model.value_objects import Money
from scm.domain.repository.unit_of_work import UnitOfWork


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: str, new_price: str) -> Product:
        """Update a product's catalog price.

        This does NOT affect any existing orders — they captured a
        price snapshot at creation time.
        """
        with self._uow as uow:
            product = uow.products.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
            product.update_price(Money.of(new_price))
            uow.products.save(product)
            uow.commit()
        return product
