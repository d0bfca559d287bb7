"""Integration tests for the AdjustInventory use case."""

import pytest

from scm.application import notifications
from scm.application.adjust_inventory import AdjustInventoryHandler
from scm.application.create_order import CreateOrderHandler
from scm.application.dto import OrderItemSpec
from scm.domain.exceptions import EntityNotFoundError, InsufficientStockError, ValidationError
from scm.domain.service.stock_policy import StockPolicy
from tests.fakes import FailingSink
from tests.helpers import stock


class TestAdjust:

    def test_increase(self, uow, seed):
        dto = AdjustInventoryHandler(uow).handle(seed.gadget_inventory_id, 15, "cycle count")
        assert dto.quantity == 25
        assert stock(uow, seed.gadget_inventory_id).quantity == 25

    def test_decrease_to_zero(self, uow, seed):
        dto = AdjustInventoryHandler(uow).handle(seed.gadget_inventory_id, -10, "water damage")
        assert dto.quantity == 0

    def test_below_zero_rejected(self, uow, seed):
        with pytest.raises(InsufficientStockError, match="Insufficient stock for this adjustment"):
            AdjustInventoryHandler(uow).handle(seed.gadget_inventory_id, -11)
        assert stock(uow, seed.gadget_inventory_id).quantity == 10

    def test_below_reserved_rejected(self, uow, seed):
        CreateOrderHandler(uow).handle(
            "SALES", seed.location_id, [OrderItemSpec(seed.gadget_id, 8)],
            customer_id=seed.customer_id,
        )
        with pytest.raises(InsufficientStockError, match="reserved"):
            AdjustInventoryHandler(uow).handle(seed.gadget_inventory_id, -5)
        assert stock(uow, seed.gadget_inventory_id).quantity == 10

    @pytest.mark.parametrize("bad", [0, True, "5", 2.0])
    def test_non_integer_or_zero_rejected(self, uow, seed, bad):
        with pytest.raises(ValidationError, match="non-zero integer"):
            AdjustInventoryHandler(uow).handle(seed.gadget_inventory_id, bad)

    def test_unknown_row(self, uow, seed):
        with pytest.raises(EntityNotFoundError):
            AdjustInventoryHandler(uow).handle("missing", 1)


class TestAdjustNotifications:

    def test_inventory_update_payload(self, uow, seed, sink):
        AdjustInventoryHandler(uow, sink).handle(seed.widget_inventory_id, 5, "found a box")

        [(payload, topic)] = sink.of(notifications.INVENTORY_UPDATE)
        assert topic == f"warehouse-{seed.location_id}"
        assert payload["type"] == "inventory-adjusted"
        assert payload["adjustment"] == 5
        assert payload["reason"] == "found a box"
        assert payload["previousQuantity"] == 100
        assert payload["data"]["quantity"] == 105
        assert sink.of(notifications.LOW_STOCK_ALERT) == []

    def test_low_stock_alert(self, uow, seed, sink):
        handler = AdjustInventoryHandler(uow, sink, StockPolicy(low_stock_threshold=10))
        handler.handle(seed.widget_inventory_id, -85, "shrinkage")

        [(alert, topic)] = sink.of(notifications.LOW_STOCK_ALERT)
        assert topic == f"warehouse-{seed.location_id}"
        assert alert == {
            "inventoryId": seed.widget_inventory_id,
            "productName": "Widget",
            "currentQuantity": 15,
            "availableQuantity": 15,
            "reorderPoint": 20,
            "location": "Main Warehouse",
        }

    def test_threshold_does_not_trigger_alert(self, uow, seed, sink):
        # Gadget reorder point is 5; 8 on hand is still above it.
        handler = AdjustInventoryHandler(uow, sink, StockPolicy(low_stock_threshold=10))
        handler.handle(seed.gadget_inventory_id, -2)
        assert sink.of(notifications.LOW_STOCK_ALERT) == []

    def test_alert_at_reorder_point(self, uow, seed, sink):
        AdjustInventoryHandler(uow, sink).handle(seed.gadget_inventory_id, -5)
        [(alert, _)] = sink.of(notifications.LOW_STOCK_ALERT)
        assert alert["currentQuantity"] == 5
        assert alert["reorderPoint"] == 5

    def test_notification_failure_is_swallowed(self, uow, seed):
        sink = FailingSink()
        dto = AdjustInventoryHandler(uow, sink).handle(seed.widget_inventory_id, -90)

        assert sink.attempts == 2
        assert dto.quantity == 10
        assert stock(uow, seed.widget_inventory_id).quantity == 10
