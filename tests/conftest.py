"""
tests.conftest

Shared fixtures: a file-backed SQLite database per test, plus person factories.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Awaitable, Callable
from datetime import date, datetime
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from person_registry.auth.models import User
from person_registry.db.init_db import init_db
from person_registry.db.session import create_engine, create_sessionmaker
from person_registry.domain import Coordinates, HairColor, Location, Person
from person_registry.services.person_service import PersonService
from person_registry.settings import Settings


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(env="test", database_url=f"sqlite+aiosqlite:///{tmp_path / 'registry.db'}")


@pytest_asyncio.fixture
async def engine(settings: Settings) -> AsyncIterator[AsyncEngine]:
    engine = create_engine(settings)
    await init_db(engine)
    try:
        yield engine
    finally:
        await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return create_sessionmaker(engine)


@pytest.fixture
def service(
    session_factory: async_sessionmaker[AsyncSession], settings: Settings
) -> PersonService:
    return PersonService(session_factory=session_factory, settings=settings)


@pytest.fixture
def owner() -> User:
    return User(id=7, login="alice")


@pytest.fixture
def stranger() -> User:
    return User(id=8, login="bob")


@pytest.fixture
def count_rows(
    session_factory: async_sessionmaker[AsyncSession],
) -> Callable[[type[Any]], Awaitable[int]]:
    async def _count(record_type: type[Any]) -> int:
        async with session_factory() as session:
            stmt = select(func.count()).select_from(record_type)
            return (await session.execute(stmt)).scalar_one()

    return _count


def build_person(*, with_location: bool = True, **overrides: Any) -> Person:
    fields: dict[str, Any] = {
        "name": "Ada",
        "coordinates": Coordinates(x=2**40, y=-12),
        "creation_date": datetime(2024, 3, 1, 12, 30, 15),
        "height": 172,
        "birthday": date(1990, 5, 17),
        "passport_id": "AB-123456",
        "hair_color": HairColor.black,
        "location": Location(x=1, y=2**35, z=-3, name="Lab") if with_location else None,
    }
    fields.update(overrides)
    return Person(**fields)


@pytest.fixture
def make_person() -> Callable[..., Person]:
    return build_person
