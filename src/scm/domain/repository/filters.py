"""Typed filters consumed by repository list methods.

Built from validated query parameters at the application boundary;
repositories translate them into store queries.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, TypeVar

from scm.domain.model.order import OrderPriority, OrderStatus, OrderType

T = TypeVar("T")


@dataclass(frozen=True)
class OrderFilter:
    status: OrderStatus | None = None
    order_type: OrderType | None = None
    location_id: str | None = None
    customer_id: str | None = None
    supplier_id: str | None = None
    priority: OrderPriority | None = None
    created_from: datetime | None = None
    created_to: datetime | None = None
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class InventoryFilter:
    location_id: str | None = None
    product_id: str | None = None
    search: str | None = None
    # When set, only rows whose quantity is at or below
    # max(reorder_point, low_stock_threshold) are returned.
    low_stock_threshold: int | None = None
    page: int = 1
    limit: int = 20

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0
