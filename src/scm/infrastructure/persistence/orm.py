"""Relational tables.

The CHECK constraints repeat the inventory invariants so the store rejects
a bad row even if it is written outside the domain model.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from scm.infrastructure.persistence.database import Base


class ProductRow(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True)
    sku = Column(String(64), nullable=False, unique=True)
    name = Column(String(255), nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)


class LocationRow(Base):
    __tablename__ = "locations"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    type = Column(String(32), nullable=False)
    city = Column(String(128))


class CustomerRow(Base):
    __tablename__ = "customers"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True)


class SupplierRow(Base):
    __tablename__ = "suppliers"

    id = Column(String(36), primary_key=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255))
    contact_name = Column(String(255))


class InventoryRow(Base):
    __tablename__ = "inventory"
    __table_args__ = (
        UniqueConstraint("product_id", "location_id", name="uq_inventory_product_location"),
        CheckConstraint("quantity >= 0", name="ck_inventory_quantity_non_negative"),
        CheckConstraint("reserved_qty >= 0", name="ck_inventory_reserved_non_negative"),
        CheckConstraint("reserved_qty <= quantity", name="ck_inventory_reserved_within_quantity"),
    )

    id = Column(String(36), primary_key=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False, index=True)
    location_id = Column(String(36), ForeignKey("locations.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False, default=0)
    reserved_qty = Column(Integer, nullable=False, default=0)
    reorder_point = Column(Integer, nullable=False)
    last_updated = Column(DateTime(timezone=True), nullable=False)


class OrderRow(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True)
    order_number = Column(String(32), nullable=False)
    order_type = Column(String(16), nullable=False, index=True)
    status = Column(String(16), nullable=False, index=True)
    priority = Column(String(16), nullable=False)
    location_id = Column(String(36), ForeignKey("locations.id"), nullable=False, index=True)
    customer_id = Column(String(36), ForeignKey("customers.id"))
    supplier_id = Column(String(36), ForeignKey("suppliers.id"))
    total_amount = Column(Numeric(12, 2), nullable=False)
    expected_date = Column(DateTime(timezone=True))
    fulfilled_date = Column(DateTime(timezone=True))
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False)

    items = relationship(
        "OrderItemRow",
        order_by="OrderItemRow.position",
        cascade="all, delete-orphan",
    )

    __table_args__ = (UniqueConstraint("order_number", name="uq_orders_order_number"),)


class OrderItemRow(Base):
    __tablename__ = "order_items"
    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_order_items_quantity_positive"),)

    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    product_id = Column(String(36), ForeignKey("products.id"), nullable=False)
    position = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    unit_price = Column(Numeric(12, 2), nullable=False)
    total = Column(Numeric(12, 2), nullable=False)

    product = relationship("ProductRow")


class DeliveryRow(Base):
    __tablename__ = "deliveries"

    id = Column(String(36), primary_key=True)
    order_id = Column(String(36), ForeignKey("orders.id"), nullable=False, index=True)
    from_location_id = Column(String(36), ForeignKey("locations.id"), nullable=False)
    status = Column(String(16), nullable=False)
    scheduled_date = Column(DateTime(timezone=True), nullable=False)
    delivered_date = Column(DateTime(timezone=True))
    driver = Column(String(255))
    tracking_number = Column(String(64))
    notes = Column(Text)
