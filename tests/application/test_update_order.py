"""Integration tests for the UpdateOrder use case."""

from datetime import datetime, timezone

import pytest

from scm.application import notifications
from scm.application.cancel_order import CancelOrderHandler
from scm.application.create_order import CreateOrderHandler
from scm.application.dto import OrderItemSpec
from scm.application.show_order import ShowOrderHandler
from scm.application.update_order import UpdateOrderHandler
from scm.domain.exceptions import EntityNotFoundError, InvalidStateError, ValidationError
from tests.helpers import stock


def _place(uow, seed):
    return CreateOrderHandler(uow).handle(
        "SALES", seed.location_id, [OrderItemSpec(seed.widget_id, 3)],
        customer_id=seed.customer_id,
    )


class TestUpdateOrder:

    def test_updates_details(self, uow, seed):
        dto = _place(uow, seed)
        expected = datetime(2024, 6, 1, tzinfo=timezone.utc)

        UpdateOrderHandler(uow).handle(dto.id, "high", expected, "leave at the gate")

        shown = ShowOrderHandler(uow).handle(dto.id)
        assert shown.priority == "HIGH"
        assert shown.expected_date.startswith("2024-06-01T00:00:00")
        assert shown.notes == "leave at the gate"

    def test_items_total_and_stock_untouched(self, uow, seed):
        dto = _place(uow, seed)
        UpdateOrderHandler(uow).handle(dto.id, priority="URGENT")

        shown = ShowOrderHandler(uow).handle(dto.id)
        assert shown.status == "PENDING"
        assert shown.total_amount == dto.total_amount
        assert [i.quantity for i in shown.items] == [3]
        assert stock(uow, seed.widget_inventory_id).reserved_quantity == 3

    def test_broadcasts_order_updated(self, uow, seed, sink):
        dto = _place(uow, seed)
        UpdateOrderHandler(uow, sink).handle(dto.id, notes="fragile")

        [(payload, topic)] = sink.of(notifications.ORDER_UPDATED)
        assert topic == notifications.GLOBAL_TOPIC
        assert payload["type"] == "order-updated"
        assert payload["data"]["notes"] == "fragile"


class TestUpdateOrderRejections:

    def test_nothing_to_update(self, uow, seed):
        dto = _place(uow, seed)
        with pytest.raises(ValidationError, match="Nothing to update"):
            UpdateOrderHandler(uow).handle(dto.id)

    def test_unknown_priority(self, uow, seed):
        dto = _place(uow, seed)
        with pytest.raises(ValidationError, match="Invalid priority"):
            UpdateOrderHandler(uow).handle(dto.id, priority="SOMEDAY")

    def test_missing_order(self, uow, seed):
        with pytest.raises(EntityNotFoundError):
            UpdateOrderHandler(uow).handle("no-such-order", notes="x")

    def test_cancelled_order_is_frozen(self, uow, seed, sink):
        dto = _place(uow, seed)
        CancelOrderHandler(uow).handle(dto.id, "duplicate")

        with pytest.raises(InvalidStateError):
            UpdateOrderHandler(uow, sink).handle(dto.id, notes="too late")

        assert ShowOrderHandler(uow).handle(dto.id).notes == "Cancelled: duplicate"
        assert sink.published == []
