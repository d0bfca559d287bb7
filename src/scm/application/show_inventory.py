"""Application services: inventory queries."""

from __future__ import annotations

from scm.application.dto import InventoryDTO, to_inventory_dto
from scm.application.queries import MAX_PAGE_SIZE, InventoryQuery
from scm.domain.exceptions import EntityNotFoundError
from scm.domain.repository.filters import Page
from scm.domain.repository.unit_of_work import UnitOfWork
from scm.domain.service.stock_policy import StockPolicy


class ShowInventoryHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, inventory_id: str) -> InventoryDTO:
        with self._uow as uow:
            item = uow.inventory.get_by_id(inventory_id)
            if item is None:
                raise EntityNotFoundError(f"Inventory item '{inventory_id}' not found")
            return to_inventory_dto(item)


class ListInventoryHandler:

    def __init__(self, uow: UnitOfWork, policy: StockPolicy | None = None) -> None:
        self._uow = uow
        self._policy = policy or StockPolicy()

    def handle(self, query: InventoryQuery | None = None) -> Page[InventoryDTO]:
        query = query or InventoryQuery()
        with self._uow as uow:
            page = uow.inventory.list(query.to_filter(self._policy.low_stock_threshold))
            return Page(
                items=[to_inventory_dto(i) for i in page.items],
                page=page.page,
                limit=page.limit,
                total=page.total,
            )


class LowStockHandler:
    """Every row at or below its reorder point or the threshold, lowest quantity first."""

    def __init__(self, uow: UnitOfWork, policy: StockPolicy | None = None) -> None:
        self._list = ListInventoryHandler(uow, policy)

    def handle(self, location_id: str | None = None) -> list[InventoryDTO]:
        rows: list[InventoryDTO] = []
        page_no = 1
        while True:
            query = InventoryQuery(
                location_id=location_id, low_stock=True, page=page_no, limit=MAX_PAGE_SIZE
            )
            page = self._list.handle(query)
            rows.extend(page.items)
            if page_no >= page.pages:
                break
            page_no += 1
        return sorted(rows, key=lambda r: r.quantity)
