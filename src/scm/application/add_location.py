"""Application service: Add Location use case."""

from __future__ import annotations

from scm.application.queries import parse_enum
from scm.domain.model.location import Location, LocationType
from scm.domain.repository.unit_of_work import UnitOfWork


class AddLocationHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self, name: str, type: LocationType | str = LocationType.WAREHOUSE, city: str | None = None
    ) -> Location:
        location = Location.create(name, parse_enum(LocationType, type, "location type"), city)
        with self._uow as uow:
            uow.locations.add(location)
            uow.commit()
        return location
