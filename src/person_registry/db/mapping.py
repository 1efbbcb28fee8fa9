"""
person_registry.db.mapping

Record <-> domain mapping routines.

Responsibilities:
- Flatten a Person into the scalar column values of the person table.
- Rebuild a Person from its row plus the already-resolved sub-entities.
"""

from __future__ import annotations

from typing import Any

from person_registry.db.models import CoordinatesRecord, LocationRecord, PersonRecord
from person_registry.domain import Coordinates, HairColor, Location, Person


def person_columns(person: Person) -> dict[str, Any]:
    # Foreign keys and owner_id are decided by the store, not copied from the value.
    return {
        "name": person.name,
        "creation_date": person.creation_date,
        "height": person.height,
        "birthday": person.birthday,
        "passport_id": person.passport_id,
        "hair_color": person.hair_color.value if person.hair_color is not None else None,
    }


def coordinates_from_record(record: CoordinatesRecord) -> Coordinates:
    return Coordinates(id=record.id, x=record.x, y=record.y)


def location_from_record(record: LocationRecord) -> Location:
    return Location(id=record.id, x=record.x, y=record.y, z=record.z, name=record.name)


def person_from_record(
    record: PersonRecord,
    *,
    coordinates: Coordinates,
    location: Location | None,
) -> Person:
    return Person(
        id=record.id,
        name=record.name,
        coordinates=coordinates,
        creation_date=record.creation_date,
        height=record.height,
        birthday=record.birthday,
        passport_id=record.passport_id,
        hair_color=HairColor(record.hair_color) if record.hair_color is not None else None,
        location=location,
        owner_id=record.owner_id,
    )
