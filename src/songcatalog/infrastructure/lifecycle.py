"""Application lifecycle management for startup and shutdown tasks."""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from songcatalog.config import Settings
from songcatalog.domain.exceptions import ConfigurationError
from songcatalog.infrastructure.observability import configure_logging
from songcatalog.infrastructure.persistence import Database
from songcatalog.infrastructure.persistence.populate import populate_database

logger = logging.getLogger(__name__)


# Hey future me, this validates the SQLite path BEFORE the engine exists. SQLite needs to create
# the db file plus -journal/-wal files next to it, so the parent directory must exist and be
# writable. We don't create the .db file ourselves, SQLite does that on first connect.
# No-op for PostgreSQL and in-memory URLs.
def _validate_sqlite_path(settings: Settings) -> None:
    """Validate SQLite database path accessibility before engine creation."""
    db_path = settings._get_sqlite_db_path()
    if db_path is None:
        return

    try:
        if str(db_path.parent) != ".":
            db_path.parent.mkdir(parents=True, exist_ok=True)
            logger.debug("Ensured SQLite parent directory exists: %s", db_path.parent)
    except OSError as exc:
        raise ConfigurationError(
            f"Unable to create SQLite database directory '{db_path.parent}': {exc}. "
            "Update DATABASE__URL or adjust directory permissions."
        ) from exc

    try:
        test_file = db_path.parent / f".{db_path.stem}_write_test"
        test_file.write_bytes(b"test")
        test_file.unlink()
    except OSError as exc:
        raise ConfigurationError(
            f"Unable to write files in database directory '{db_path.parent}': {exc}. "
            "SQLite requires write permissions to create database and journal files."
        ) from exc


# Listen future me, everything before `yield` runs at STARTUP, everything after at SHUTDOWN.
# Settings come from app.state.settings (create_app puts them there), never from the env here.
# With DATABASE__POPULATE=true the tables are dropped and seeded, otherwise create_all only
# adds missing tables - real schema changes go through Alembic.
@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles:
    - Logging configuration
    - SQLite path validation
    - Database initialization (create tables or populate)
    - Engine disposal on shutdown
    """
    settings: Settings = app.state.settings

    configure_logging(
        log_level=settings.log_level,
        json_format=settings.observability.log_json_format,
        app_name=settings.app_name,
    )
    logger.info("Starting application: %s", settings.app_name)

    _validate_sqlite_path(settings)

    db = Database(settings.database)
    app.state.db = db
    logger.info("Database initialized: %s", settings.database.url)

    try:
        if settings.database.populate:
            await populate_database(db)
        else:
            await db.create_tables()

        yield
    finally:
        logger.info("Shutting down application: %s", settings.app_name)
        await db.close()
        logger.info("Database connections closed")
