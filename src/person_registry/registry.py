"""
person_registry.registry

Composition root for the registry.

Responsibilities:
- Configure logging and create the DB engine/session factory once.
- Create tables in dev/test.
- Hand out a PersonService and dispose the engine when the scope ends.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from person_registry.db.init_db import init_db
from person_registry.db.session import create_engine, create_sessionmaker
from person_registry.observability.logging import configure_logging, get_logger
from person_registry.services.person_service import PersonService
from person_registry.settings import Settings, get_settings

log = get_logger(__name__)


@asynccontextmanager
async def open_registry(*, settings: Settings | None = None) -> AsyncIterator[PersonService]:
    if settings is None:
        settings = get_settings()
    configure_logging(
        service_name=settings.service_name, level=settings.log_level, fmt=settings.log_format
    )

    engine = create_engine(settings)
    log.info("startup", env=settings.env, cascade_delete=settings.cascade_delete)
    try:
        if settings.env in ("dev", "test"):
            # Prod expects the schema to be provisioned already.
            await init_db(engine)
        yield PersonService(session_factory=create_sessionmaker(engine), settings=settings)
    finally:
        # Dispose the engine to close pools/FDs gracefully.
        await engine.dispose()
        log.info("shutdown")
