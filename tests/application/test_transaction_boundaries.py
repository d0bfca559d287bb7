"""Handlers commit exactly once on success and never on rejection.

Uses the in-memory FakeUnitOfWork, no database.
"""

import pytest

from scm.application.adjust_inventory import AdjustInventoryHandler
from scm.application.cancel_order import CancelOrderHandler
from scm.application.create_order import CreateOrderHandler
from scm.application.dto import OrderItemSpec
from scm.domain.exceptions import InsufficientStockError, InvalidStateError
from scm.domain.model.inventory import InventoryItem
from scm.domain.model.location import Location, LocationType
from scm.domain.model.party import Customer
from scm.domain.model.product import Product
from scm.domain.model.value_objects import Money
from tests.fakes import FakeUnitOfWork, RecordingSink


def _setup(quantity: int = 10) -> tuple[FakeUnitOfWork, dict]:
    """Build a fake store with one stocked product at one location."""
    product = Product(id="p-1", sku="WID-1", name="Widget", unit_price=Money.of("4.00"))
    location = Location(id="loc-1", name="Main", type=LocationType.WAREHOUSE)
    customer = Customer(id="c-1", name="Alice", email="alice@example.com")
    inventory = InventoryItem.create("p-1", "loc-1", quantity=quantity, product_name="Widget")
    uow = FakeUnitOfWork(
        products=[product], locations=[location], customers=[customer], inventory=[inventory]
    )
    return uow, {"inventory_id": inventory.id}


def _create(uow: FakeUnitOfWork, qty: int, sink=None):
    return CreateOrderHandler(uow, sink).handle(
        "SALES", "loc-1", [OrderItemSpec("p-1", qty)], customer_id="c-1"
    )


class TestCommitOnSuccess:

    def test_create_commits_once(self):
        uow, ids = _setup()
        _create(uow, 4)
        assert uow.commits == 1
        assert uow.inventory.peek(ids["inventory_id"]).reserved_quantity == 4

    def test_cancel_commits_once(self):
        uow, ids = _setup()
        dto = _create(uow, 4)
        CancelOrderHandler(uow).handle(dto.id, "test")
        assert uow.commits == 2
        assert uow.inventory.peek(ids["inventory_id"]).reserved_quantity == 0


class TestNoCommitOnRejection:

    def test_rejected_create_commits_nothing(self):
        uow, ids = _setup(quantity=3)
        sink = RecordingSink()
        with pytest.raises(InsufficientStockError):
            _create(uow, 4, sink)

        assert not uow.committed
        assert sink.published == []
        assert uow.inventory.peek(ids["inventory_id"]).reserved_quantity == 0

    def test_rejected_cancel_is_rolled_back(self):
        uow, ids = _setup()
        dto = _create(uow, 4)
        CancelOrderHandler(uow).handle(dto.id, "first")

        with pytest.raises(InvalidStateError):
            CancelOrderHandler(uow).handle(dto.id, "second")
        assert uow.commits == 2

    def test_rejected_adjustment_leaves_stock(self):
        uow, ids = _setup(quantity=3)
        with pytest.raises(InsufficientStockError):
            AdjustInventoryHandler(uow).handle(ids["inventory_id"], -4)
        assert not uow.committed
        assert uow.inventory.peek(ids["inventory_id"]).quantity == 3
