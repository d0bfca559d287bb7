"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change, products are added and removed from the catalog.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass

from scm.domain.exceptions import ValidationError
from scm.domain.model.value_objects import Money


@dataclass
class Product:
    """A product in the catalog, identified to humans by its SKU."""

    id: str
    sku: str
    name: str
    unit_price: Money

    @staticmethod
    def create(sku: str, name: str, unit_price: Money) -> Product:
        if not sku or not sku.strip():
            raise ValidationError("Product SKU is required")
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        return Product(
            id=str(uuid.uuid4()),
            sku=sku.strip().upper(),
            name=name.strip(),
            unit_price=unit_price,
        )

    def update_price(self, new_price: Money) -> None:
        """Change the catalog price.

        This does NOT affect any existing orders because orders
        capture a price snapshot at creation time.
        """
        self.unit_price = new_price
