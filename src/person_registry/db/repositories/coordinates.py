"""
person_registry.db.repositories.coordinates

Store for the mandatory Coordinates value of a person.
"""

from __future__ import annotations

from typing import Any

from person_registry.db.mapping import coordinates_from_record
from person_registry.db.models import CoordinatesRecord
from person_registry.db.repositories.base import ValueRepo
from person_registry.domain import Coordinates


class CoordinatesRepo(ValueRepo[Coordinates, CoordinatesRecord]):
    record_type = CoordinatesRecord
    entity = "coordinates"

    def _columns(self, value: Coordinates) -> dict[str, Any]:
        return {"x": value.x, "y": value.y}

    def _from_record(self, record: CoordinatesRecord) -> Coordinates:
        return coordinates_from_record(record)
