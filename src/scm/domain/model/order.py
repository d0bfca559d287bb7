"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items.  Status changes
go through the transition table below; inventory effects of a transition
are coordinated by the InventoryReservationService, never by the Order.
"""

from __future__ import annotations

import secrets
import time
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from scm.domain.exceptions import InvalidStateError, MissingCounterpartyError, ValidationError
from scm.domain.model.value_objects import Money, Quantity


class OrderType(str, Enum):
    PURCHASE = "PURCHASE"
    SALES = "SALES"
    TRANSFER = "TRANSFER"
    RETURN = "RETURN"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"


class OrderPriority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset(
        {OrderStatus.PROCESSING, OrderStatus.SHIPPED, OrderStatus.CANCELLED}
    ),
    OrderStatus.PROCESSING: frozenset({OrderStatus.SHIPPED, OrderStatus.CANCELLED}),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.RETURNED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.RETURNED: frozenset(),
}

# Statuses in which a SALES order still holds its inventory reservation.
RESERVING_STATUSES = frozenset(
    {OrderStatus.PENDING, OrderStatus.CONFIRMED, OrderStatus.PROCESSING}
)


def generate_order_number(now_ms: int | None = None) -> str:
    """``ORD-<last 6 digits of the ms clock>-<3 random digits>``.

    Not globally unique on its own; the store enforces uniqueness and the
    create handler retries on collision.
    """
    if now_ms is None:
        now_ms = time.time_ns() // 1_000_000
    return f"ORD-{str(now_ms)[-6:]}-{secrets.randbelow(1000):03d}"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class OrderLineItem:
    """Captures the price of a product at order-creation time.

    Line items are created with their order and never mutated afterwards.
    """

    product_id: str
    quantity: Quantity
    unit_price: Money  # snapshot, not the live product price
    product_name: str = ""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for purchase, sales, transfer and return orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: str
    order_number: str
    order_type: OrderType
    location_id: str
    items: list[OrderLineItem]
    total_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    priority: OrderPriority = OrderPriority.MEDIUM
    customer_id: str | None = None
    supplier_id: str | None = None
    expected_date: datetime | None = None
    fulfilled_date: datetime | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_type: OrderType,
        location_id: str,
        items: list[OrderLineItem],
        order_number: str,
        customer_id: str | None = None,
        supplier_id: str | None = None,
        priority: OrderPriority | None = None,
        expected_date: datetime | None = None,
        notes: str | None = None,
    ) -> Order:
        """Create a new PENDING order, enforcing all invariants.

        The total amount is computed here once and never recomputed.
        """
        if not location_id:
            raise ValidationError("Location is required")
        if order_type == OrderType.PURCHASE and not supplier_id:
            raise MissingCounterpartyError(order_type.value, "Supplier ID")
        if order_type == OrderType.SALES and not customer_id:
            raise MissingCounterpartyError(order_type.value, "Customer ID")
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero()
        for item in items:
            total = total + item.line_total

        return Order(
            id=str(uuid.uuid4()),
            order_number=order_number,
            order_type=order_type,
            location_id=location_id,
            items=list(items),
            total_amount=total,
            priority=priority or OrderPriority.MEDIUM,
            customer_id=customer_id,
            supplier_id=supplier_id,
            expected_date=expected_date,
            notes=notes,
        )

    # --- State transitions ----------------------------------------------------

    def confirm(self) -> None:
        self._transition(OrderStatus.CONFIRMED, "confirm")

    def start_processing(self) -> None:
        self._transition(OrderStatus.PROCESSING, "process")

    def mark_shipped(self, now: datetime | None = None) -> None:
        """CONFIRMED|PROCESSING -> SHIPPED, stamping the fulfilled date.

        Stock movement for the shipment is done separately by the
        InventoryReservationService inside the same transaction.
        """
        if self.status not in (OrderStatus.CONFIRMED, OrderStatus.PROCESSING):
            raise InvalidStateError(
                f"Order {self.order_number} must be CONFIRMED or PROCESSING to "
                f"fulfill, current status is {self.status.value}",
                current_status=self.status.value,
            )
        now = now or _utcnow()
        self._transition(OrderStatus.SHIPPED, "fulfill", now)
        self.fulfilled_date = now

    def cancel(self, reason: str, now: datetime | None = None) -> None:
        """Any non-terminal status -> CANCELLED, recording the reason in notes."""
        if self.status in (OrderStatus.DELIVERED, OrderStatus.CANCELLED, OrderStatus.RETURNED):
            raise InvalidStateError(
                f"Cannot cancel order {self.order_number} with status {self.status.value}",
                current_status=self.status.value,
            )
        self._transition(OrderStatus.CANCELLED, "cancel", now)
        self._append_note(f"Cancelled: {reason}")

    def mark_delivered(self, now: datetime | None = None) -> None:
        self._transition(OrderStatus.DELIVERED, "deliver", now)

    def mark_returned(self, reason: str, now: datetime | None = None) -> None:
        self._transition(OrderStatus.RETURNED, "return", now)
        self._append_note(f"Returned: {reason}")

    # --- Editable details -----------------------------------------------------

    def update_details(
        self,
        priority: OrderPriority | None = None,
        expected_date: datetime | None = None,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> None:
        """Change scheduling fields of a live order.

        Items, total and status are never touched here.  Notes replace the
        existing text.
        """
        if self.is_terminal:
            raise InvalidStateError(
                f"Cannot update order {self.order_number} with status {self.status.value}",
                current_status=self.status.value,
            )
        if priority is not None:
            self.priority = priority
        if expected_date is not None:
            self.expected_date = expected_date
        if notes is not None:
            self.notes = notes
        self.updated_at = now or _utcnow()

    # --- Computed properties --------------------------------------------------

    @property
    def holds_reservation(self) -> bool:
        """True while a SALES order still has stock earmarked for it."""
        return self.order_type == OrderType.SALES and self.status in RESERVING_STATUSES

    @property
    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self.status] or self.status == OrderStatus.DELIVERED

    # --- Internal helpers -----------------------------------------------------

    def _transition(
        self, target: OrderStatus, action: str, now: datetime | None = None
    ) -> None:
        if target not in _TRANSITIONS[self.status]:
            raise InvalidStateError(
                f"Cannot {action} order {self.order_number} "
                f"— current status is {self.status.value}",
                current_status=self.status.value,
            )
        self.status = target
        self.updated_at = now or _utcnow()

    def _append_note(self, line: str) -> None:
        self.notes = f"{self.notes}\n{line}" if self.notes else line
