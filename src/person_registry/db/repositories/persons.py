"""
person_registry.db.repositories.persons

Store for the Person aggregate root.

Responsibilities:
- Cascade writes into the Coordinates/Location stores before writing the person row.
- Rebuild the full Person graph on read.
- Decide when a person's location reference is null.
- Optionally remove unreferenced Coordinates/Location rows when a person is removed.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from person_registry.db.mapping import person_columns, person_from_record
from person_registry.db.models import PersonRecord
from person_registry.db.repositories.base import IdentifiableRepository, storage_errors
from person_registry.db.repositories.coordinates import CoordinatesRepo
from person_registry.db.repositories.locations import LocationRepo
from person_registry.domain import Coordinates, Location, Person
from person_registry.errors import PersonNotFoundError, StorageError
from person_registry.observability.logging import get_logger

log = get_logger(__name__)


class PersonRepo:
    def __init__(self, session: AsyncSession, *, cascade_delete: bool = False) -> None:
        self._session = session
        self._cascade_delete = cascade_delete
        self._coordinates: IdentifiableRepository[Coordinates, int] = CoordinatesRepo(session)
        self._locations: IdentifiableRepository[Location, int] = LocationRepo(session)

    async def insert(self, person: Person, owner_id: int) -> bool:
        """
        Write coordinates, then the optional location, then the person row.

        Sub-entity rows are always newly allocated; their generated ids are captured
        onto `person.coordinates` / `person.location` and used as foreign keys. Callers
        must run this inside a transaction so a failed person write leaves no orphans.
        """

        await self._coordinates.insert(person.coordinates)
        location_id: int | None = None
        if person.location is not None:
            await self._locations.insert(person.location)
            location_id = person.location.id

        record = PersonRecord(
            **person_columns(person),
            coordinates_id=person.coordinates.id,
            location_id=location_id,
            owner_id=owner_id,
        )
        with storage_errors("Error adding person to the database"):
            self._session.add(record)
            await self._session.flush()

        person.id = record.id
        person.owner_id = owner_id
        log.info("person_inserted", person_id=record.id, owner_id=owner_id)
        return True

    async def read(self, id: int) -> Person | None:
        with storage_errors("Error reading person from the database"):
            record = await self._session.get(PersonRecord, id)
        if record is None:
            return None

        coordinates = await self._coordinates.read(record.coordinates_id)
        if coordinates is None:
            raise StorageError(f"Person {id} references missing coordinates")
        location = None
        if record.location_id is not None:
            location = await self._locations.read(record.location_id)
        return person_from_record(record, coordinates=coordinates, location=location)

    async def update(self, person: Person, id: int) -> bool:
        """
        Overwrite a person and its sub-entities.

        Coordinates are rewritten in place at the existing foreign key, as is an
        existing location; a location row is only allocated when the person had none.
        Rows aliased by other persons change for them too. Dropping the location
        nulls the reference and leaves the old row behind.
        """

        refs = await self._references(id)
        if refs is None:
            raise PersonNotFoundError(id)
        coordinates_id, location_id = refs

        location = person.location
        if location is None:
            location_id = None
        elif location_id is None:
            await self._locations.insert(location)
            location_id = location.id
        else:
            await self._locations.update(location, location_id)
            location.id = location_id

        await self._coordinates.update(person.coordinates, coordinates_id)
        person.coordinates.id = coordinates_id

        stmt = (
            update(PersonRecord)
            .where(PersonRecord.id == id)
            .values(
                **person_columns(person),
                coordinates_id=coordinates_id,
                location_id=location_id,
            )
        )
        with storage_errors("Error updating person in the database"):
            result = await self._session.execute(stmt)

        updated = result.rowcount == 1
        if updated:
            person.id = id
            log.info("person_updated", person_id=id)
        return updated

    async def remove(self, id: int) -> bool:
        refs = await self._references(id) if self._cascade_delete else None

        with storage_errors("Error removing person from the database"):
            result = await self._session.execute(delete(PersonRecord).where(PersonRecord.id == id))
        removed = result.rowcount == 1
        if not removed:
            return False

        if refs is not None:
            coordinates_id, location_id = refs
            if not await self._is_referenced(PersonRecord.coordinates_id, coordinates_id):
                await self._coordinates.remove(coordinates_id)
            if location_id is not None and not await self._is_referenced(
                PersonRecord.location_id, location_id
            ):
                await self._locations.remove(location_id)

        log.info("person_removed", person_id=id, cascade=self._cascade_delete)
        return True

    async def _references(self, id: int) -> tuple[int, int | None] | None:
        stmt = select(PersonRecord.coordinates_id, PersonRecord.location_id).where(
            PersonRecord.id == id
        )
        with storage_errors("Error reading person references from the database"):
            row = (await self._session.execute(stmt)).one_or_none()
        return None if row is None else (row.coordinates_id, row.location_id)

    async def _is_referenced(self, column: Any, ref_id: int) -> bool:
        stmt = select(func.count()).select_from(PersonRecord).where(column == ref_id)
        with storage_errors("Error counting person references in the database"):
            return (await self._session.execute(stmt)).scalar_one() > 0


# --- Module Notes -----------------------------------------------------------
# owner_id is written once on insert; update never touches it.
