"""
person_registry.db.repositories.locations

Store for the optional Location value of a person.
"""

from __future__ import annotations

from typing import Any

from person_registry.db.mapping import location_from_record
from person_registry.db.models import LocationRecord
from person_registry.db.repositories.base import ValueRepo
from person_registry.domain import Location


class LocationRepo(ValueRepo[Location, LocationRecord]):
    record_type = LocationRecord
    entity = "location"

    def _columns(self, value: Location) -> dict[str, Any]:
        return {"x": value.x, "y": value.y, "z": value.z, "name": value.name}

    def _from_record(self, record: LocationRecord) -> Location:
        return location_from_record(record)
