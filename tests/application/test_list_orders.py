"""Integration tests for order queries."""

import pytest

from scm.application.create_order import CreateOrderHandler
from scm.application.dto import OrderItemSpec
from scm.application.list_orders import ListOrdersHandler
from scm.application.queries import MAX_PAGE_SIZE, OrderQuery
from scm.application.show_order import ShowOrderHandler
from scm.domain.exceptions import EntityNotFoundError, ValidationError
from scm.domain.model.order import OrderStatus


@pytest.fixture
def orders(uow, seed):
    handler = CreateOrderHandler(uow)
    sales = [
        handler.handle(
            "SALES", seed.location_id, [OrderItemSpec(seed.widget_id, 1)],
            customer_id=seed.customer_id, priority=priority,
        )
        for priority in ("LOW", "HIGH", "HIGH")
    ]
    purchase = handler.handle(
        "PURCHASE", seed.location_id, [OrderItemSpec(seed.gadget_id, 10)],
        supplier_id=seed.supplier_id,
    )
    return sales, purchase


class TestShowOrder:

    def test_show(self, uow, orders):
        _, purchase = orders
        dto = ShowOrderHandler(uow).handle(purchase.id)
        assert dto.order_number == purchase.order_number
        assert dto.total_amount == "250.00"
        assert dto.items[0].product_name == "Gadget"

    def test_unknown(self, uow, seed):
        with pytest.raises(EntityNotFoundError):
            ShowOrderHandler(uow).handle("missing")


class TestListOrders:

    def test_all_newest_first(self, uow, orders):
        sales, purchase = orders
        page = ListOrdersHandler(uow).handle()
        assert page.total == 4
        assert page.items[0].id == purchase.id
        assert page.items[-1].id == sales[0].id

    def test_filter_by_type(self, uow, orders):
        page = ListOrdersHandler(uow).handle(OrderQuery.parse(order_type="SALES"))
        assert page.total == 3
        assert {o.order_type for o in page.items} == {"SALES"}

    def test_filter_by_priority_and_customer(self, uow, seed, orders):
        page = ListOrdersHandler(uow).handle(
            OrderQuery.parse(priority="HIGH", customer_id=seed.customer_id)
        )
        assert page.total == 2

    def test_filter_by_status(self, uow, orders):
        page = ListOrdersHandler(uow).handle(OrderQuery(status=OrderStatus.CONFIRMED))
        assert page.items == []
        assert page.total == 0

    def test_pagination(self, uow, orders):
        page = ListOrdersHandler(uow).handle(OrderQuery.parse(page=2, limit=3))
        assert page.page == 2
        assert page.pages == 2
        assert len(page.items) == 1


class TestOrderQueryValidation:

    def test_unknown_status_rejected(self):
        with pytest.raises(ValidationError, match="status"):
            OrderQuery.parse(status="LOST")

    def test_limit_bounds(self):
        assert OrderQuery.parse(limit=MAX_PAGE_SIZE).limit == MAX_PAGE_SIZE
        with pytest.raises(ValidationError):
            OrderQuery.parse(limit=MAX_PAGE_SIZE + 1)

    def test_inverted_date_range_rejected(self):
        with pytest.raises(ValidationError, match="start_date must not be after end_date"):
            OrderQuery.parse(start_date="2024-06-01T00:00:00", end_date="2024-01-01T00:00:00")

    def test_dates_are_parsed(self):
        query = OrderQuery.parse(start_date="2024-01-01T00:00:00")
        assert query.to_filter().created_from.year == 2024
