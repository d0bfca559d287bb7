"""SQLAlchemy implementation of DeliveryRepository."""

from __future__ import annotations

from sqlalchemy.orm import Session

from scm.domain.model.delivery import Delivery, DeliveryStatus
from scm.domain.repository.delivery_repository import DeliveryRepository
from scm.infrastructure.persistence.orm import DeliveryRow
from scm.infrastructure.persistence.timestamps import as_utc


class SqlDeliveryRepository(DeliveryRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_for_update(self, delivery_id: str) -> Delivery | None:
        row = (
            self._session.query(DeliveryRow)
            .filter(DeliveryRow.id == delivery_id)
            .with_for_update()
            .populate_existing()
            .first()
        )
        return self._to_domain(row) if row else None

    def list_for_order(self, order_id: str) -> list[Delivery]:
        rows = (
            self._session.query(DeliveryRow)
            .filter(DeliveryRow.order_id == order_id)
            .order_by(DeliveryRow.scheduled_date)
        )
        return [self._to_domain(r) for r in rows]

    def add(self, delivery: Delivery) -> None:
        row = DeliveryRow(id=delivery.id)
        self._apply(row, delivery)
        self._session.add(row)
        self._session.flush()

    def save(self, delivery: Delivery) -> None:
        self._apply(self._session.get(DeliveryRow, delivery.id), delivery)
        self._session.flush()

    @staticmethod
    def _apply(row: DeliveryRow, delivery: Delivery) -> None:
        row.order_id = delivery.order_id
        row.from_location_id = delivery.from_location_id
        row.status = delivery.status.value
        row.scheduled_date = delivery.scheduled_date
        row.delivered_date = delivery.delivered_date
        row.driver = delivery.driver
        row.tracking_number = delivery.tracking_number
        row.notes = delivery.notes

    @staticmethod
    def _to_domain(row: DeliveryRow) -> Delivery:
        return Delivery(
            id=row.id,
            order_id=row.order_id,
            from_location_id=row.from_location_id,
            status=DeliveryStatus(row.status),
            scheduled_date=as_utc(row.scheduled_date),
            delivered_date=as_utc(row.delivered_date),
            driver=row.driver,
            tracking_number=row.tracking_number,
            notes=row.notes,
        )
