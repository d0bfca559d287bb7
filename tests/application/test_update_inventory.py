"""Integration tests for the UpdateInventory use case."""

import pytest

from scm.application import notifications
from scm.application.update_inventory import UpdateInventoryHandler
from scm.domain.exceptions import EntityNotFoundError, ValidationError
from tests.helpers import stock


class TestUpdateReorderPoint:

    def test_sets_reorder_point_only(self, uow, seed):
        dto = UpdateInventoryHandler(uow).handle(seed.widget_inventory_id, 40)

        assert dto.reorder_point == 40
        inv = stock(uow, seed.widget_inventory_id)
        assert (inv.quantity, inv.reserved_quantity, inv.reorder_point) == (100, 0, 40)

    def test_broadcasts_inventory_updated(self, uow, seed, sink):
        UpdateInventoryHandler(uow, sink).handle(seed.widget_inventory_id, 40)

        [(payload, topic)] = sink.of(notifications.INVENTORY_UPDATE)
        assert topic == f"warehouse-{seed.location_id}"
        assert payload["type"] == "inventory-updated"
        assert payload["data"]["reorder_point"] == 40
        assert sink.of(notifications.LOW_STOCK_ALERT) == []

    def test_raising_reorder_point_to_quantity_alerts(self, uow, seed, sink):
        # Gadget has 10 on hand.
        UpdateInventoryHandler(uow, sink).handle(seed.gadget_inventory_id, 10)

        [(alert, topic)] = sink.of(notifications.LOW_STOCK_ALERT)
        assert topic == f"warehouse-{seed.location_id}"
        assert alert["productName"] == "Gadget"
        assert alert["currentQuantity"] == 10
        assert alert["reorderPoint"] == 10


class TestUpdateReorderPointRejections:

    def test_negative(self, uow, seed):
        with pytest.raises(ValidationError):
            UpdateInventoryHandler(uow).handle(seed.widget_inventory_id, -1)
        assert stock(uow, seed.widget_inventory_id).reorder_point == 20

    def test_missing_row(self, uow, seed):
        with pytest.raises(EntityNotFoundError):
            UpdateInventoryHandler(uow).handle("no-such-row", 5)
