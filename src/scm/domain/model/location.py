"""Location — a warehouse, store or distribution center holding stock."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from enum import Enum

from scm.domain.exceptions import ValidationError


class LocationType(str, Enum):
    WAREHOUSE = "WAREHOUSE"
    STORE = "STORE"
    DISTRIBUTION_CENTER = "DISTRIBUTION_CENTER"


@dataclass
class Location:
    id: str
    name: str
    type: LocationType = LocationType.WAREHOUSE
    city: str | None = None

    @staticmethod
    def create(name: str, type: LocationType, city: str | None = None) -> Location:
        if not name or not name.strip():
            raise ValidationError("Location name is required")
        return Location(id=str(uuid.uuid4()), name=name.strip(), type=type, city=city)
