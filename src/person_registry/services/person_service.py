"""
person_registry.services.person_service

Person lifecycle service (transaction owner).

Responsibilities:
- Run each operation in its own session and transaction, so a cascade either
  commits as a whole or leaves nothing behind.
- Stamp the caller as owner on create; refuse update/remove for non-owners.
- Offer a result-typed lookup for callers that prefer values over exceptions.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from person_registry.auth.models import User
from person_registry.db.repositories.access import AccessGuard
from person_registry.db.repositories.persons import PersonRepo
from person_registry.domain import Person
from person_registry.errors import AccessDeniedError, PersonRegistryError
from person_registry.observability.logging import get_logger, operation_scope
from person_registry.results import Absent, Fault, Found, Lookup
from person_registry.settings import Settings

log = get_logger(__name__)


class PersonService:
    def __init__(
        self,
        *,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings,
    ) -> None:
        self._session_factory = session_factory
        self._settings = settings

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        # session.begin() commits on clean exit and rolls back on any exception.
        with operation_scope(operation):
            async with self._session_factory() as session, session.begin():
                yield session

    def _persons(self, session: AsyncSession) -> PersonRepo:
        return PersonRepo(session, cascade_delete=self._settings.cascade_delete)

    async def create(self, person: Person, *, user: User) -> bool:
        async with self._transaction("create") as session:
            return await self._persons(session).insert(person, user.id)

    async def get(self, person_id: int) -> Person | None:
        async with self._transaction("get") as session:
            return await self._persons(session).read(person_id)

    async def lookup(self, person_id: int) -> Lookup[Person]:
        try:
            person = await self.get(person_id)
        except PersonRegistryError as e:
            return Fault(e)
        return Absent() if person is None else Found(person)

    async def check_access(self, person_id: int, *, user: User) -> bool:
        async with self._transaction("check_access") as session:
            return await AccessGuard(session).check_access(person_id, user.id)

    async def update(self, person: Person, person_id: int, *, user: User) -> bool:
        async with self._transaction("update") as session:
            await self._require_owner(session, person_id, user)
            return await self._persons(session).update(person, person_id)

    async def remove(self, person_id: int, *, user: User) -> bool:
        async with self._transaction("remove") as session:
            await self._require_owner(session, person_id, user)
            return await self._persons(session).remove(person_id)

    async def _require_owner(self, session: AsyncSession, person_id: int, user: User) -> None:
        if not await AccessGuard(session).check_access(person_id, user.id):
            log.warning("access_denied", person_id=person_id, owner_id=user.id)
            raise AccessDeniedError(person_id, user.id)


# --- Module Notes -----------------------------------------------------------
# The ownership check and the mutation share one transaction, so the owner read
# and the write see the same snapshot.
