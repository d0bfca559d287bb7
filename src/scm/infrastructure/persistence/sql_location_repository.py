"""SQLAlchemy implementation of LocationRepository."""

from __future__ import annotations

from sqlalchemy.orm import Session

from scm.domain.model.location import Location, LocationType
from scm.domain.repository.location_repository import LocationRepository
from scm.infrastructure.persistence.orm import LocationRow


class SqlLocationRepository(LocationRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_id(self, location_id: str) -> Location | None:
        row = self._session.get(LocationRow, location_id)
        return self._to_domain(row) if row else None

    def list_all(self) -> list[Location]:
        rows = self._session.query(LocationRow).order_by(LocationRow.name)
        return [self._to_domain(r) for r in rows]

    def add(self, location: Location) -> None:
        self._session.add(
            LocationRow(
                id=location.id,
                name=location.name,
                type=location.type.value,
                city=location.city,
            )
        )
        self._session.flush()

    @staticmethod
    def _to_domain(row: LocationRow) -> Location:
        return Location(id=row.id, name=row.name, type=LocationType(row.type), city=row.city)
