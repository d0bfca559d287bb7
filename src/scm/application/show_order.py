"""Application service: Show Order use case (query)."""

from __future__ import annotations

from scm.application.dto import OrderDTO, to_order_dto
from scm.domain.exceptions import EntityNotFoundError
from scm.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: str) -> OrderDTO:
        with self._uow as uow:
            order = uow.orders.get_by_id(order_id)
            if order is None:
                raise EntityNotFoundError(f"Order '{order_id}' not found")
            return to_order_dto(order)
