"""
tests.test_person_repo

Person store: cascading insert, graph read, in-place update, and removal policy.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest
from sqlalchemy import select, update

from person_registry.db.models import CoordinatesRecord, LocationRecord, PersonRecord
from person_registry.db.repositories.persons import PersonRepo
from person_registry.domain import Coordinates, HairColor, Location, Person
from person_registry.errors import PersonNotFoundError, StorageError


@pytest.mark.asyncio
async def test_insert_then_read_round_trip(session_factory, make_person) -> None:
    person = make_person()
    async with session_factory() as session, session.begin():
        assert await PersonRepo(session).insert(person, owner_id=7) is True
    assert person.id is not None
    assert person.owner_id == 7

    async with session_factory() as session:
        loaded = await PersonRepo(session).read(person.id)

    assert loaded.model_dump() == person.model_dump()
    assert loaded.hair_color is HairColor.black
    assert loaded.coordinates.x == 2**40


@pytest.mark.asyncio
async def test_person_without_location_stores_null_reference(session_factory, make_person) -> None:
    person = make_person(with_location=False, hair_color=None)
    async with session_factory() as session, session.begin():
        await PersonRepo(session).insert(person, owner_id=1)

    async with session_factory() as session:
        record = await session.get(PersonRecord, person.id)
        assert record.location_id is None
        assert record.hair_color is None
        loaded = await PersonRepo(session).read(person.id)

    assert loaded.location is None
    assert loaded.hair_color is None


@pytest.mark.asyncio
async def test_read_missing_person_is_absent(session_factory) -> None:
    async with session_factory() as session:
        assert await PersonRepo(session).read(999) is None


@pytest.mark.asyncio
async def test_update_rewrites_coordinates_in_place(
    session_factory, make_person, count_rows
) -> None:
    person = make_person()
    async with session_factory() as session, session.begin():
        await PersonRepo(session).insert(person, owner_id=1)
    coordinates_id = person.coordinates.id
    assert await count_rows(CoordinatesRecord) == 1

    changed = make_person(name="Grace", height=160, coordinates=Coordinates(x=-1, y=99))
    async with session_factory() as session, session.begin():
        assert await PersonRepo(session).update(changed, person.id) is True

    assert await count_rows(CoordinatesRecord) == 1
    async with session_factory() as session:
        loaded = await PersonRepo(session).read(person.id)
    assert loaded.coordinates.id == coordinates_id
    assert (loaded.coordinates.x, loaded.coordinates.y) == (-1, 99)
    assert loaded.name == "Grace"
    assert loaded.height == 160
    assert loaded.owner_id == 1


@pytest.mark.asyncio
async def test_update_reuses_existing_location_row(
    session_factory, make_person, count_rows
) -> None:
    person = make_person()
    async with session_factory() as session, session.begin():
        await PersonRepo(session).insert(person, owner_id=1)
    location_id = person.location.id

    changed = make_person(location=Location(x=5, y=6, z=7, name="Harbor"))
    async with session_factory() as session, session.begin():
        await PersonRepo(session).update(changed, person.id)

    assert await count_rows(LocationRecord) == 1
    async with session_factory() as session:
        loaded = await PersonRepo(session).read(person.id)
    expected = Location(id=location_id, x=5, y=6, z=7, name="Harbor")
    assert loaded.location.model_dump() == expected.model_dump()


@pytest.mark.asyncio
async def test_update_allocates_location_when_none_existed(
    session_factory, make_person, count_rows
) -> None:
    person = make_person(with_location=False)
    async with session_factory() as session, session.begin():
        await PersonRepo(session).insert(person, owner_id=1)
    assert await count_rows(LocationRecord) == 0

    changed = make_person(location=Location(x=1, y=1, z=1))
    async with session_factory() as session, session.begin():
        await PersonRepo(session).update(changed, person.id)

    assert await count_rows(LocationRecord) == 1
    async with session_factory() as session:
        loaded = await PersonRepo(session).read(person.id)
    assert loaded.location.id == changed.location.id


@pytest.mark.asyncio
async def test_update_dropping_location_nulls_reference(
    session_factory, make_person, count_rows
) -> None:
    person = make_person()
    async with session_factory() as session, session.begin():
        await PersonRepo(session).insert(person, owner_id=1)

    async with session_factory() as session, session.begin():
        await PersonRepo(session).update(make_person(with_location=False), person.id)

    async with session_factory() as session:
        loaded = await PersonRepo(session).read(person.id)
    assert loaded.location is None
    # The old row is left behind.
    assert await count_rows(LocationRecord) == 1


@pytest.mark.asyncio
async def test_update_missing_person_is_a_fault(session_factory, make_person) -> None:
    async with session_factory() as session, session.begin():
        with pytest.raises(PersonNotFoundError) as exc_info:
            await PersonRepo(session).update(make_person(), 12345)
    assert exc_info.value.person_id == 12345
    assert isinstance(exc_info.value, StorageError)


@pytest.mark.asyncio
async def test_failed_person_write_rolls_back_sub_entities(session_factory, count_rows) -> None:
    # name=None bypasses validation and trips the NOT NULL constraint on person.name.
    broken = Person.model_construct(
        id=None,
        name=None,
        coordinates=Coordinates(x=1, y=2),
        creation_date=datetime(2024, 1, 1),
        height=180,
        birthday=date(2000, 1, 1),
        passport_id="X",
        hair_color=None,
        location=Location(x=1, y=2, z=3),
        owner_id=None,
    )

    with pytest.raises(StorageError) as exc_info:
        async with session_factory() as session, session.begin():
            await PersonRepo(session).insert(broken, owner_id=1)

    assert str(exc_info.value) == "Error adding person to the database"
    assert exc_info.value.cause is not None
    assert await count_rows(CoordinatesRecord) == 0
    assert await count_rows(LocationRecord) == 0
    assert await count_rows(PersonRecord) == 0


@pytest.mark.asyncio
async def test_remove_leaves_sub_entities_by_default(
    session_factory, make_person, count_rows
) -> None:
    person = make_person()
    async with session_factory() as session, session.begin():
        await PersonRepo(session).insert(person, owner_id=1)

    async with session_factory() as session, session.begin():
        assert await PersonRepo(session).remove(person.id) is True
        assert await PersonRepo(session).remove(person.id) is False

    assert await count_rows(PersonRecord) == 0
    assert await count_rows(CoordinatesRecord) == 1
    assert await count_rows(LocationRecord) == 1


@pytest.mark.asyncio
async def test_cascade_remove_keeps_rows_still_referenced(
    session_factory, make_person, count_rows
) -> None:
    first = make_person()
    second = make_person(name="Grace", with_location=False)
    async with session_factory() as session, session.begin():
        repo = PersonRepo(session, cascade_delete=True)
        await repo.insert(first, owner_id=1)
        await repo.insert(second, owner_id=2)
        # Alias second onto first's coordinates row.
        await session.execute(
            update(PersonRecord)
            .where(PersonRecord.id == second.id)
            .values(coordinates_id=first.coordinates.id)
        )

    async with session_factory() as session, session.begin():
        assert await PersonRepo(session, cascade_delete=True).remove(first.id) is True

    async with session_factory() as session:
        remaining = (await session.execute(select(CoordinatesRecord.id))).scalars().all()
    assert set(remaining) == {first.coordinates.id, second.coordinates.id}
    assert await count_rows(LocationRecord) == 0

    async with session_factory() as session, session.begin():
        assert await PersonRepo(session, cascade_delete=True).remove(second.id) is True
    assert await count_rows(CoordinatesRecord) == 1


@pytest.mark.asyncio
async def test_aware_creation_date_is_stored_as_utc(session_factory, make_person) -> None:
    moscow = timezone(timedelta(hours=3))
    person = make_person(creation_date=datetime(2024, 3, 1, 12, 0, tzinfo=moscow))
    assert person.creation_date == datetime(2024, 3, 1, 9, 0)

    async with session_factory() as session, session.begin():
        await PersonRepo(session).insert(person, owner_id=1)

    async with session_factory() as session:
        loaded = await PersonRepo(session).read(person.id)
    assert loaded.creation_date == datetime(2024, 3, 1, 9, 0)
    assert loaded.creation_date.tzinfo is None


@pytest.mark.asyncio
async def test_update_rewrites_rows_shared_with_other_persons(session_factory, make_person) -> None:
    first = make_person()
    second = make_person(name="Grace")
    async with session_factory() as session, session.begin():
        repo = PersonRepo(session)
        await repo.insert(first, owner_id=1)
        await repo.insert(second, owner_id=2)
        await session.execute(
            update(PersonRecord)
            .where(PersonRecord.id == second.id)
            .values(coordinates_id=first.coordinates.id, location_id=first.location.id)
        )
    coordinates_id = first.coordinates.id
    location_id = first.location.id

    changed = make_person(
        coordinates=Coordinates(x=42, y=43),
        location=Location(x=9, y=8, z=7, name="Pier"),
    )
    async with session_factory() as session, session.begin():
        assert await PersonRepo(session).update(changed, first.id) is True

    async with session_factory() as session:
        shared = await PersonRepo(session).read(second.id)
    assert shared.name == "Grace"
    assert shared.coordinates.id == coordinates_id
    assert (shared.coordinates.x, shared.coordinates.y) == (42, 43)
    assert shared.location.id == location_id
    assert (shared.location.x, shared.location.name) == (9, "Pier")
