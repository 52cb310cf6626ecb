"""FastAPI application factory."""

import logging
import time
from contextlib import asynccontextmanager
from collections.abc import AsyncIterator
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.engine import make_url

from app.config import get_settings
from app.application.interfaces import RecordStore
from app.application.resources import CONTACTS
from app.application.services import ResourceService
from app.domain.entities import Principal
from app.infrastructure.database import Base, get_engine, session_scope
from app.infrastructure.database.repositories import SQLAlchemyRecordStore
from app.infrastructure.memory import InMemoryRecordStore
from app.infrastructure.logging.log_config import setup_logging
from app.presentation.api.endpoints.health import router as health_router
from app.presentation.api.endpoints.root import router as root_router
from app.presentation.api.errors import register_exception_handlers
from app.presentation.api.router import build_api_router

logger = logging.getLogger(__name__)

_DEMO_CONTACTS = (
    {
        "firstName": "John",
        "lastName": "Doe",
        "email": "john.doe@example.com",
        "phone": "+1-555-0123",
        "address": "123 Main St, New York, NY 10001",
        "company": "Tech Corp",
        "notes": "Met at tech conference",
    },
    {
        "firstName": "Jane",
        "lastName": "Smith",
        "email": "jane.smith@example.com",
        "phone": "+1-555-0456",
        "address": "456 Oak Ave, Los Angeles, CA 90210",
        "company": "Design Studio",
        "notes": "Potential client for web design project",
    },
)


async def _ensure_database_exists() -> None:
    """Create the PostgreSQL database if it does not yet exist.

    Connects to the default ``postgres`` maintenance database, checks for the
    target database name, and issues ``CREATE DATABASE`` when missing.
    """
    from urllib.parse import urlparse

    import asyncpg

    settings = get_settings()
    parsed = urlparse(settings.database_url)
    db_name = parsed.path.lstrip("/")
    if not db_name:
        return

    # Build a connection URL pointing at the default 'postgres' database
    maintenance_url = settings.database_url.rsplit("/", 1)[0] + "/postgres"

    try:
        conn = await asyncpg.connect(maintenance_url)
        try:
            exists = await conn.fetchval(
                "SELECT 1 FROM pg_database WHERE datname = $1", db_name
            )
            if not exists:
                # CREATE DATABASE cannot run inside a transaction block
                await conn.execute(f'CREATE DATABASE "{db_name}"')
                logger.info("Created database '%s'", db_name)
            else:
                logger.debug("Database '%s' already exists", db_name)
        finally:
            await conn.close()
    except Exception as exc:
        logger.warning("Could not auto-create database '%s': %s", db_name, exc)


async def _prepare_database() -> None:
    """Make sure the database and the ``records`` table exist."""
    url = make_url(get_settings().database_url)
    if url.get_backend_name() == "postgresql":
        await _ensure_database_exists()
    elif url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def _seed_demo_contacts(store: RecordStore) -> None:
    """Create the demo contacts for the demo principal, unless it already has some.

    Safe to call on every startup.
    """
    settings = get_settings()
    owner = Principal(id=settings.demo_principal)
    service = ResourceService(CONTACTS, store.repository(CONTACTS.name))
    if await store.repository(CONTACTS.name).count(owner_ref=owner.id) > 0:
        logger.debug("Demo contacts already present for '%s'", owner.id)
        return
    for payload in _DEMO_CONTACTS:
        await service.create_record(dict(payload), owner)
    logger.info("Seeded %d demo contacts for '%s'", len(_DEMO_CONTACTS), owner.id)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — configure logging, create tables, seed demo data."""
    settings = get_settings()
    setup_logging()

    if settings.record_store == "database":
        await _prepare_database()

    if settings.seed_demo_data:
        try:
            if settings.record_store == "database":
                async with session_scope() as session:
                    await _seed_demo_contacts(SQLAlchemyRecordStore(session))
            else:
                await _seed_demo_contacts(app.state.record_store)
        except Exception:
            logger.exception("Failed to seed demo contacts, continuing without them")

    logger.info(
        "%s %s started (env=%s, store=%s)",
        settings.app_title, settings.app_version, settings.app_env, settings.record_store,
    )

    yield

    # Shutdown
    if settings.record_store == "database":
        await get_engine().dispose()


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.record_store = InMemoryRecordStore()
    app.state.started_at = time.monotonic()

    register_exception_handlers(app)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Mount routes
    app.include_router(root_router)
    app.include_router(health_router)
    app.include_router(build_api_router(include_error_simulation=not settings.is_production))

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
