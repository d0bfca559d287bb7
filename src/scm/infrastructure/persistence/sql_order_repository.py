"""SQLAlchemy implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from scm.domain.exceptions import DuplicateOrderNumberError
from scm.domain.model.order import (
    Order,
    OrderLineItem,
    OrderPriority,
    OrderStatus,
    OrderType,
)
from scm.domain.model.value_objects import Money, Quantity
from scm.domain.repository.filters import OrderFilter, Page
from scm.domain.repository.order_repository import OrderRepository
from scm.infrastructure.persistence.orm import OrderItemRow, OrderRow
from scm.infrastructure.persistence.timestamps import as_utc


class SqlOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: str) -> Order | None:
        row = self._query().filter(OrderRow.id == order_id).first()
        return self._to_domain(row) if row else None

    def get_for_update(self, order_id: str) -> Order | None:
        row = (
            self._query()
            .filter(OrderRow.id == order_id)
            .with_for_update(of=OrderRow)
            .populate_existing()
            .first()
        )
        return self._to_domain(row) if row else None

    def list(self, flt: OrderFilter) -> Page[Order]:
        query = self._session.query(OrderRow)
        if flt.status:
            query = query.filter(OrderRow.status == flt.status.value)
        if flt.order_type:
            query = query.filter(OrderRow.order_type == flt.order_type.value)
        if flt.location_id:
            query = query.filter(OrderRow.location_id == flt.location_id)
        if flt.customer_id:
            query = query.filter(OrderRow.customer_id == flt.customer_id)
        if flt.supplier_id:
            query = query.filter(OrderRow.supplier_id == flt.supplier_id)
        if flt.priority:
            query = query.filter(OrderRow.priority == flt.priority.value)
        if flt.created_from:
            query = query.filter(OrderRow.created_at >= flt.created_from)
        if flt.created_to:
            query = query.filter(OrderRow.created_at <= flt.created_to)

        total = query.count()
        rows = (
            query.options(selectinload(OrderRow.items).joinedload(OrderItemRow.product))
            .order_by(OrderRow.created_at.desc(), OrderRow.id)
            .offset(flt.offset)
            .limit(flt.limit)
            .all()
        )
        return Page(
            items=[self._to_domain(r) for r in rows],
            page=flt.page,
            limit=flt.limit,
            total=total,
        )

    def add(self, order: Order) -> None:
        row = OrderRow(
            id=order.id,
            order_number=order.order_number,
            order_type=order.order_type.value,
            status=order.status.value,
            priority=order.priority.value,
            location_id=order.location_id,
            customer_id=order.customer_id,
            supplier_id=order.supplier_id,
            total_amount=order.total_amount.amount,
            expected_date=order.expected_date,
            fulfilled_date=order.fulfilled_date,
            notes=order.notes,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemRow(
                    id=item.id,
                    product_id=item.product_id,
                    position=position,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    total=item.line_total.amount,
                )
                for position, item in enumerate(order.items)
            ],
        )
        self._session.add(row)
        try:
            self._session.flush()
        except IntegrityError as exc:
            if "order_number" in str(exc.orig):
                raise DuplicateOrderNumberError(
                    f"Order number {order.order_number} is already taken"
                ) from exc
            raise

    def save(self, order: Order) -> None:
        """Write back header fields; line items and total are immutable."""
        row = self._session.get(OrderRow, order.id)
        row.status = order.status.value
        row.priority = order.priority.value
        row.expected_date = order.expected_date
        row.fulfilled_date = order.fulfilled_date
        row.notes = order.notes
        row.updated_at = order.updated_at
        self._session.flush()

    # --- Mapping --------------------------------------------------------------

    def _query(self):
        return self._session.query(OrderRow).options(
            selectinload(OrderRow.items).joinedload(OrderItemRow.product)
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        items = [
            OrderLineItem(
                id=i.id,
                product_id=i.product_id,
                product_name=i.product.name if i.product is not None else "",
                quantity=Quantity(i.quantity),
                unit_price=Money.of(i.unit_price),
            )
            for i in row.items
        ]
        return Order(
            id=row.id,
            order_number=row.order_number,
            order_type=OrderType(row.order_type),
            location_id=row.location_id,
            items=items,
            total_amount=Money.of(row.total_amount),
            status=OrderStatus(row.status),
            priority=OrderPriority(row.priority),
            customer_id=row.customer_id,
            supplier_id=row.supplier_id,
            expected_date=as_utc(row.expected_date),
            fulfilled_date=as_utc(row.fulfilled_date),
            notes=row.notes,
            created_at=as_utc(row.created_at),
            updated_at=as_utc(row.updated_at),
        )
