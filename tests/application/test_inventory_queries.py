"""Integration tests for creating and querying inventory."""

import pytest

from scm.application import notifications
from scm.application.add_location import AddLocationHandler
from scm.application.add_product import AddProductHandler
from scm.application.adjust_inventory import AdjustInventoryHandler
from scm.application.create_inventory import CreateInventoryHandler
from scm.application.queries import InventoryQuery
from scm.application.show_inventory import (
    ListInventoryHandler,
    LowStockHandler,
    ShowInventoryHandler,
)
from scm.domain.exceptions import EntityNotFoundError, ValidationError
from scm.domain.service.stock_policy import StockPolicy


class TestCreateInventory:

    def test_creates_with_default_reorder_point(self, uow, seed, sink):
        store = AddLocationHandler(uow).handle("Corner Store", "store", "Shelbyville")

        dto = CreateInventoryHandler(uow, sink).handle(seed.widget_id, store.id, 12)

        assert dto.quantity == 12
        assert dto.reserved_quantity == 0
        assert dto.reorder_point == 50
        assert dto.product_name == "Widget"
        assert dto.location_name == "Corner Store"
        [(payload, topic)] = sink.of(notifications.INVENTORY_UPDATE)
        assert payload["type"] == "inventory-created"
        assert topic == f"warehouse-{store.id}"

    def test_configured_default_reorder_point(self, uow, seed):
        store = AddLocationHandler(uow).handle("Depot", "DISTRIBUTION_CENTER")
        dto = CreateInventoryHandler(uow, default_reorder_point=15).handle(
            seed.widget_id, store.id, 1
        )
        assert dto.reorder_point == 15

    def test_duplicate_pair_rejected(self, uow, seed):
        with pytest.raises(ValidationError, match="already exists"):
            CreateInventoryHandler(uow).handle(seed.widget_id, seed.location_id, 5)

    def test_negative_quantity_rejected(self, uow, seed):
        product = AddProductHandler(uow).handle("NEG-1", "Negative", "1.00")
        with pytest.raises(ValidationError):
            CreateInventoryHandler(uow).handle(product.id, seed.location_id, -1)

    def test_unknown_product(self, uow, seed):
        with pytest.raises(EntityNotFoundError, match="Product"):
            CreateInventoryHandler(uow).handle("nope", seed.location_id, 5)


class TestShowAndList:

    def test_show(self, uow, seed):
        dto = ShowInventoryHandler(uow).handle(seed.gadget_inventory_id)
        assert dto.product_name == "Gadget"
        assert dto.available_quantity == 10

    def test_show_unknown(self, uow, seed):
        with pytest.raises(EntityNotFoundError):
            ShowInventoryHandler(uow).handle("missing")

    def test_list_all(self, uow, seed):
        page = ListInventoryHandler(uow).handle()
        assert page.total == 2
        assert page.pages == 1

    def test_most_recently_updated_first(self, uow, seed):
        AdjustInventoryHandler(uow).handle(seed.gadget_inventory_id, 1)
        page = ListInventoryHandler(uow).handle()
        assert page.items[0].id == seed.gadget_inventory_id

    def test_search_by_name_case_insensitive(self, uow, seed):
        page = ListInventoryHandler(uow).handle(InventoryQuery.parse(search="widg"))
        assert [r.product_name for r in page.items] == ["Widget"]

    def test_search_by_sku(self, uow, seed):
        page = ListInventoryHandler(uow).handle(InventoryQuery.parse(search="GAD"))
        assert [r.product_name for r in page.items] == ["Gadget"]

    def test_filter_by_location(self, uow, seed):
        other = AddLocationHandler(uow).handle("Elsewhere")
        page = ListInventoryHandler(uow).handle(InventoryQuery.parse(location_id=other.id))
        assert page.total == 0

    def test_pagination(self, uow, seed):
        page = ListInventoryHandler(uow).handle(InventoryQuery.parse(page=2, limit=1))
        assert page.total == 2
        assert page.pages == 2
        assert len(page.items) == 1


class TestLowStock:

    def test_low_stock_filter_uses_reorder_point(self, uow, seed):
        # Gadget: 10 on hand, reorder 5, threshold 10 -> low. Widget: 100 vs 20 -> fine.
        page = ListInventoryHandler(uow, StockPolicy(10)).handle(
            InventoryQuery.parse(low_stock=True)
        )
        assert [r.product_name for r in page.items] == ["Gadget"]

    def test_low_stock_report_sorted_by_quantity(self, uow, seed):
        AdjustInventoryHandler(uow).handle(seed.widget_inventory_id, -85)
        rows = LowStockHandler(uow, StockPolicy(10)).handle()
        assert [(r.product_name, r.quantity) for r in rows] == [("Gadget", 10), ("Widget", 15)]

    def test_low_stock_report_by_location(self, uow, seed):
        other = AddLocationHandler(uow).handle("Empty Shed")
        assert LowStockHandler(uow).handle(other.id) == []


class TestInventoryQueryValidation:

    def test_limit_over_maximum_rejected(self):
        with pytest.raises(ValidationError, match="Invalid query parameters"):
            InventoryQuery.parse(limit=500)

    def test_page_zero_rejected(self):
        with pytest.raises(ValidationError, match="page"):
            InventoryQuery.parse(page=0)

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            InventoryQuery.parse(colour="red")

    def test_unset_values_are_ignored(self):
        query = InventoryQuery.parse(location_id=None, search="")
        assert query.location_id is None
        assert query.search is None
