"""SQLAlchemy implementation of InventoryRepository."""

from __future__ import annotations

from sqlalchemy import or_
from sqlalchemy.orm import Session

from scm.domain.model.inventory import InventoryItem
from scm.domain.repository.filters import InventoryFilter, Page
from scm.domain.repository.inventory_repository import InventoryRepository
from scm.infrastructure.persistence.orm import InventoryRow, LocationRow, ProductRow
from scm.infrastructure.persistence.timestamps import as_utc


class SqlInventoryRepository(InventoryRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- InventoryRepository interface ----------------------------------------

    def get_by_id(self, inventory_id: str) -> InventoryItem | None:
        found = self._query().filter(InventoryRow.id == inventory_id).first()
        return self._to_domain(*found) if found else None

    def get_for_update(self, inventory_id: str) -> InventoryItem | None:
        found = (
            self._query()
            .filter(InventoryRow.id == inventory_id)
            .with_for_update(of=InventoryRow)
            .populate_existing()
            .first()
        )
        return self._to_domain(*found) if found else None

    def find_for_update(self, product_id: str, location_id: str) -> InventoryItem | None:
        found = (
            self._query()
            .filter(
                InventoryRow.product_id == product_id,
                InventoryRow.location_id == location_id,
            )
            .with_for_update(of=InventoryRow)
            .populate_existing()
            .first()
        )
        return self._to_domain(*found) if found else None

    def exists(self, product_id: str, location_id: str) -> bool:
        return (
            self._session.query(InventoryRow.id)
            .filter(
                InventoryRow.product_id == product_id,
                InventoryRow.location_id == location_id,
            )
            .first()
            is not None
        )

    def list(self, flt: InventoryFilter) -> Page[InventoryItem]:
        query = self._query()
        if flt.location_id:
            query = query.filter(InventoryRow.location_id == flt.location_id)
        if flt.product_id:
            query = query.filter(InventoryRow.product_id == flt.product_id)
        if flt.search:
            pattern = f"%{flt.search}%"
            query = query.filter(or_(ProductRow.name.ilike(pattern), ProductRow.sku.ilike(pattern)))
        if flt.low_stock_threshold is not None:
            query = query.filter(
                or_(
                    InventoryRow.quantity <= InventoryRow.reorder_point,
                    InventoryRow.quantity <= flt.low_stock_threshold,
                )
            )

        total = query.count()
        rows = (
            query.order_by(InventoryRow.last_updated.desc(), InventoryRow.id)
            .offset(flt.offset)
            .limit(flt.limit)
            .all()
        )
        return Page(
            items=[self._to_domain(*r) for r in rows],
            page=flt.page,
            limit=flt.limit,
            total=total,
        )

    def add(self, item: InventoryItem) -> None:
        self._session.add(
            InventoryRow(
                id=item.id,
                product_id=item.product_id,
                location_id=item.location_id,
                quantity=item.quantity,
                reserved_qty=item.reserved_quantity,
                reorder_point=item.reorder_point,
                last_updated=item.last_updated,
            )
        )
        self._session.flush()
        if not item.product_name or not item.location_name:
            _, item.product_name, item.location_name = (
                self._query().filter(InventoryRow.id == item.id).one()
            )

    def save(self, item: InventoryItem) -> None:
        row = self._session.get(InventoryRow, item.id)
        row.quantity = item.quantity
        row.reserved_qty = item.reserved_quantity
        row.reorder_point = item.reorder_point
        row.last_updated = item.last_updated
        self._session.flush()

    # --- Mapping --------------------------------------------------------------

    def _query(self):
        return (
            self._session.query(InventoryRow, ProductRow.name, LocationRow.name)
            .join(ProductRow, ProductRow.id == InventoryRow.product_id)
            .join(LocationRow, LocationRow.id == InventoryRow.location_id)
        )

    @staticmethod
    def _to_domain(row: InventoryRow, product_name: str, location_name: str) -> InventoryItem:
        return InventoryItem(
            id=row.id,
            product_id=row.product_id,
            location_id=row.location_id,
            quantity=row.quantity,
            reserved_quantity=row.reserved_qty,
            reorder_point=row.reorder_point,
            product_name=product_name,
            location_name=location_name,
            last_updated=as_utc(row.last_updated),
        )
