"""
person_registry.db.repositories.access

Ownership check for person mutation.

Responsibilities:
- Answer whether a caller owns a person. The stores do not enforce the answer;
  the caller decides whether to proceed.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from person_registry.db.models import PersonRecord
from person_registry.db.repositories.base import storage_errors


class AccessGuard:
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def check_access(self, person_id: int, owner_id: int) -> bool:
        # A missing person is a plain "no", not a fault.
        stmt = select(PersonRecord.owner_id).where(PersonRecord.id == person_id)
        with storage_errors("Error checking person ownership in the database"):
            stored = (await self._session.execute(stmt)).scalar_one_or_none()
        return stored is not None and stored == owner_id
