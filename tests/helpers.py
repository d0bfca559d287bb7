"""Seeding and read-back helpers for tests that run against a real store."""

from __future__ import annotations

from dataclasses import dataclass

from scm.domain.model.inventory import InventoryItem
from scm.domain.model.location import Location, LocationType
from scm.domain.model.party import Customer, Supplier
from scm.domain.model.product import Product
from scm.domain.model.value_objects import Money
from scm.domain.repository.unit_of_work import UnitOfWork


@dataclass(frozen=True)
class Seed:
    widget_id: str
    gadget_id: str
    location_id: str
    customer_id: str
    supplier_id: str
    widget_inventory_id: str
    gadget_inventory_id: str


def seed_catalog(uow: UnitOfWork) -> Seed:
    """Widget: 100 on hand (reorder 20). Gadget: 10 on hand (reorder 5)."""
    widget = Product.create("WID-1", "Widget", Money.of("10.00"))
    gadget = Product.create("GAD-1", "Gadget", Money.of("25.00"))
    location = Location.create("Main Warehouse", LocationType.WAREHOUSE, "Springfield")
    customer = Customer.create("Alice", "alice@example.com")
    supplier = Supplier.create("Acme Supply", "sales@acme.test", "Wile")
    widget_inv = InventoryItem.create(widget.id, location.id, quantity=100, reorder_point=20)
    gadget_inv = InventoryItem.create(gadget.id, location.id, quantity=10, reorder_point=5)

    with uow:
        uow.products.add(widget)
        uow.products.add(gadget)
        uow.locations.add(location)
        uow.customers.add(customer)
        uow.suppliers.add(supplier)
        uow.inventory.add(widget_inv)
        uow.inventory.add(gadget_inv)
        uow.commit()

    return Seed(
        widget_id=widget.id,
        gadget_id=gadget.id,
        location_id=location.id,
        customer_id=customer.id,
        supplier_id=supplier.id,
        widget_inventory_id=widget_inv.id,
        gadget_inventory_id=gadget_inv.id,
    )


def stock(uow: UnitOfWork, inventory_id: str) -> InventoryItem:
    """Read an inventory row in its own transaction."""
    with uow:
        return uow.inventory.get_by_id(inventory_id)
