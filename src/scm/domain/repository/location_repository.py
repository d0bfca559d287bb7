"""Abstract repository for Location."""

from __future__ import annotations

from abc import ABC, abstractmethod

from scm.domain.model.location import Location


class LocationRepository(ABC):

    @abstractmethod
    def get_by_id(self, location_id: str) -> Location | None: ...

    @abstractmethod
    def list_all(self) -> list[Location]: ...

    @abstractmethod
    def add(self, location: Location) -> None: ...
