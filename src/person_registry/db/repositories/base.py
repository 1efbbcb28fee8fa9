"""
person_registry.db.repositories.base

Shared repository contracts and plumbing.

Responsibilities:
- Declare the CRUD contract, parameterized by entity and identifier type.
- Translate SQLAlchemy faults into `StorageError` with an operation-specific message.
- Implement the value-entity store once for Coordinates and Location.
"""

from __future__ import annotations

import abc
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, ClassVar, Generic, Protocol, TypeVar

from pydantic import BaseModel
from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from person_registry.errors import StorageError
from person_registry.observability.logging import get_logger

log = get_logger(__name__)

EntityT = TypeVar("EntityT")
IdT = TypeVar("IdT")
ValueT = TypeVar("ValueT", bound=BaseModel)
RecordT = TypeVar("RecordT")


class Repository(Protocol[EntityT, IdT]):
    async def read(self, id: IdT) -> EntityT | None: ...

    async def update(self, entity: EntityT, id: IdT) -> bool: ...

    async def remove(self, id: IdT) -> bool: ...


class IdentifiableRepository(Repository[EntityT, IdT], Protocol[EntityT, IdT]):
    async def insert(self, entity: EntityT) -> bool: ...

    async def resolve_id(self, entity: EntityT) -> IdT | None: ...


@contextmanager
def storage_errors(message: str) -> Iterator[None]:
    try:
        yield
    except SQLAlchemyError as e:
        log.error("storage_fault", message=message, error=str(e))
        raise StorageError(message) from e


class ValueRepo(abc.ABC, Generic[ValueT, RecordT]):
    """
    CRUD for a value entity identified by an integer id.

    `insert` writes the generated id back onto the value. `resolve_id` matches on
    field values only; when several rows share the same values it returns the
    lowest id among them, which is not necessarily the row a caller just wrote.
    """

    record_type: ClassVar[type[Any]]
    entity: ClassVar[str]

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @abc.abstractmethod
    def _columns(self, value: ValueT) -> dict[str, Any]: ...

    @abc.abstractmethod
    def _from_record(self, record: RecordT) -> ValueT: ...

    def _attributes(self, value: ValueT) -> dict[Any, Any]:
        return {getattr(self.record_type, field): v for field, v in self._columns(value).items()}

    async def insert(self, value: ValueT) -> bool:
        record = self.record_type(**self._columns(value))
        with storage_errors(f"Error adding {self.entity} to the database"):
            self._session.add(record)
            await self._session.flush()
        value.id = record.id  # type: ignore[attr-defined]
        return True

    async def read(self, id: int) -> ValueT | None:
        with storage_errors(f"Error reading {self.entity} from the database"):
            record = await self._session.get(self.record_type, id)
        return None if record is None else self._from_record(record)

    async def update(self, value: ValueT, id: int) -> bool:
        stmt = (
            update(self.record_type)
            .where(self.record_type.id == id)
            .values(self._attributes(value))
        )
        with storage_errors(f"Error updating {self.entity} in the database"):
            result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def remove(self, id: int) -> bool:
        stmt = delete(self.record_type).where(self.record_type.id == id)
        with storage_errors(f"Error removing {self.entity} from the database"):
            result = await self._session.execute(stmt)
        return result.rowcount == 1

    async def resolve_id(self, value: ValueT) -> int | None:
        # `column == None` compiles to IS NULL, so absent optional fields still match.
        criteria = [attr == v for attr, v in self._attributes(value).items()]
        stmt = (
            select(self.record_type.id)
            .where(*criteria)
            .order_by(self.record_type.id)
            .limit(1)
        )
        with storage_errors(f"Error getting {self.entity} id from the database"):
            return (await self._session.execute(stmt)).scalar_one_or_none()


# --- Module Notes -----------------------------------------------------------
# Value-based resolution is kept for callers that only hold field values; the
# Person cascade uses the ids captured by `insert` instead.
