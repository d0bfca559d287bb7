"""Stock invariants checked end to end against the real Unit of Work.

Starting point for every test: Gadget has 20 on hand and a SALES order
holds 5 of them.
"""

import pytest

from scm.application.adjust_inventory import AdjustInventoryHandler
from scm.application.cancel_order import CancelOrderHandler
from scm.application.confirm_order import ConfirmOrderHandler
from scm.application.create_order import CreateOrderHandler
from scm.application.dto import OrderItemSpec
from scm.application.fulfill_order import FulfillOrderHandler
from scm.application.show_order import ShowOrderHandler
from scm.domain.exceptions import InsufficientStockError, InvalidStateError
from tests.helpers import stock


@pytest.fixture
def held(uow, seed):
    AdjustInventoryHandler(uow).handle(seed.gadget_inventory_id, 10, "restock")
    order = CreateOrderHandler(uow).handle(
        "SALES", seed.location_id, [OrderItemSpec(seed.gadget_id, 5)],
        customer_id=seed.customer_id,
    )
    inv = stock(uow, seed.gadget_inventory_id)
    assert (inv.quantity, inv.reserved_quantity) == (20, 5)
    return order


def _levels(uow, seed):
    inv = stock(uow, seed.gadget_inventory_id)
    return inv.quantity, inv.reserved_quantity


class TestFulfillmentStockMath:

    def test_fulfill(self, uow, seed, held):
        ConfirmOrderHandler(uow).handle(held.id)
        FulfillOrderHandler(uow).handle(held.id)
        assert _levels(uow, seed) == (15, 0)

    def test_cancel(self, uow, seed, held):
        CancelOrderHandler(uow).handle(held.id, "no longer needed")
        assert _levels(uow, seed) == (20, 0)


class TestTerminalStates:

    def test_cancelled_order_rejects_everything(self, uow, seed, held):
        CancelOrderHandler(uow).handle(held.id, "stop")

        with pytest.raises(InvalidStateError):
            FulfillOrderHandler(uow).handle(held.id)
        with pytest.raises(InvalidStateError):
            CancelOrderHandler(uow).handle(held.id, "again")

        assert _levels(uow, seed) == (20, 0)
        assert ShowOrderHandler(uow).handle(held.id).status == "CANCELLED"


class TestBounds:

    def test_reservation_never_exceeds_quantity(self, uow, seed, held):
        with pytest.raises(InsufficientStockError):
            AdjustInventoryHandler(uow).handle(seed.gadget_inventory_id, -16)
        quantity, reserved = _levels(uow, seed)
        assert 0 <= reserved <= quantity

    def test_stock_never_negative(self, uow, seed, held):
        ConfirmOrderHandler(uow).handle(held.id)
        FulfillOrderHandler(uow).handle(held.id)
        with pytest.raises(InsufficientStockError):
            AdjustInventoryHandler(uow).handle(seed.gadget_inventory_id, -16)
        AdjustInventoryHandler(uow).handle(seed.gadget_inventory_id, -15)
        assert _levels(uow, seed) == (0, 0)


class TestTotalAmount:

    def test_total_survives_transitions(self, uow, seed):
        order = CreateOrderHandler(uow).handle(
            "SALES", seed.location_id,
            [OrderItemSpec(seed.widget_id, 3, "10.00"), OrderItemSpec(seed.gadget_id, 2, "5.00")],
            customer_id=seed.customer_id,
        )
        assert order.total_amount == "40.00"

        ConfirmOrderHandler(uow).handle(order.id)
        FulfillOrderHandler(uow).handle(order.id)
        CancelOrderHandler(uow).handle(order.id, "returned to sender")

        assert ShowOrderHandler(uow).handle(order.id).total_amount == "40.00"
