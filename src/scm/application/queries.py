"""Typed query parameters, validated at the boundary.

Callers hand raw values (CLI options, request arguments) to ``parse``;
anything malformed becomes a domain ValidationError before a query runs.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic import ValidationError as PydanticValidationError

from scm.domain.exceptions import ValidationError
from scm.domain.model.order import OrderPriority, OrderStatus, OrderType
from scm.domain.repository.filters import InventoryFilter, OrderFilter

MAX_PAGE_SIZE = 100


class _Query(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    page: int = Field(1, ge=1)
    limit: int = Field(20, ge=1, le=MAX_PAGE_SIZE)

    @classmethod
    def parse(cls, **raw: Any):
        """Build from raw keyword values, dropping the ones left unset."""
        values = {k: v for k, v in raw.items() if v is not None and v != ""}
        try:
            return cls(**values)
        except PydanticValidationError as exc:
            problems = "; ".join(
                f"{'.'.join(str(p) for p in err['loc']) or 'query'}: {err['msg']}"
                for err in exc.errors()
            )
            raise ValidationError(f"Invalid query parameters: {problems}") from exc


class OrderQuery(_Query):
    status: Optional[OrderStatus] = None
    order_type: Optional[OrderType] = None
    location_id: Optional[str] = None
    customer_id: Optional[str] = None
    supplier_id: Optional[str] = None
    priority: Optional[OrderPriority] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

    @model_validator(mode="after")
    def _check_range(self) -> OrderQuery:
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date must not be after end_date")
        return self

    def to_filter(self) -> OrderFilter:
        return OrderFilter(
            status=self.status,
            order_type=self.order_type,
            location_id=self.location_id,
            customer_id=self.customer_id,
            supplier_id=self.supplier_id,
            priority=self.priority,
            created_from=self.start_date,
            created_to=self.end_date,
            page=self.page,
            limit=self.limit,
        )


class InventoryQuery(_Query):
    location_id: Optional[str] = None
    product_id: Optional[str] = None
    search: Optional[str] = Field(None, min_length=1, max_length=100)
    low_stock: bool = False

    def to_filter(self, low_stock_threshold: int) -> InventoryFilter:
        return InventoryFilter(
            location_id=self.location_id,
            product_id=self.product_id,
            search=self.search,
            low_stock_threshold=low_stock_threshold if self.low_stock else None,
            page=self.page,
            limit=self.limit,
        )


def parse_enum(enum_cls, value, field: str):
    """Accept an enum member or its (case-insensitive) string value."""
    if value is None or isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {field} {value!r}; expected one of {allowed}") from None
