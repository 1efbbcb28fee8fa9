"""
person_registry.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create tables for local development and tests.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from person_registry.db import models  # noqa: F401  # register tables on Base.metadata
from person_registry.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    Production expects the schema to be provisioned out of band.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
