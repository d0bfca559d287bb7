"""Application service: List Orders use case (query)."""

from __future__ import annotations

from scm.application.dto import OrderDTO, to_order_dto
from scm.application.queries import OrderQuery
from scm.domain.repository.filters import Page
from scm.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, query: OrderQuery | None = None) -> Page[OrderDTO]:
        query = query or OrderQuery()
        with self._uow as uow:
            page = uow.orders.list(query.to_filter())
            return Page(
                items=[to_order_dto(o) for o in page.items],
                page=page.page,
                limit=page.limit,
                total=page.total,
            )
