"""Shared fixtures.

Hey future me - every test gets its OWN SQLite file under tmp_path. A file (not :memory:)
because the concurrency tests need two independent connections that see each other's
commits, which an in-memory database shared through StaticPool can't give us.
"""

from collections.abc import AsyncGenerator, Callable, Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession

from songcatalog.config import DatabaseSettings, MailSettings, Settings
from songcatalog.infrastructure.persistence import Database
from songcatalog.infrastructure.security import TokenService
from songcatalog.main import create_app


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings pointing at a fresh SQLite file, mail disabled."""
    return Settings(
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'songs.db'}"),
        mail=MailSettings(enabled=False),
    )


@pytest.fixture
async def db(settings: Settings) -> AsyncGenerator[Database, None]:
    """Database with all tables created."""
    database = Database(settings.database)
    await database.create_tables()
    yield database
    await database.close()


@pytest.fixture
async def session(db: Database) -> AsyncGenerator[AsyncSession, None]:
    """A session from session_scope() (committed when the test passes)."""
    async with db.session_scope() as session:
        yield session


@pytest.fixture
def client(settings: Settings) -> Iterator[TestClient]:
    """TestClient with the lifespan running (tables created, no seed data)."""
    with TestClient(create_app(settings)) as test_client:
        yield test_client


@pytest.fixture
def bearer(settings: Settings) -> Callable[..., dict[str, str]]:
    """Build an Authorization header for a token holding the given roles."""

    def make(*roles: str, username: str = "tester") -> dict[str, str]:
        issued = TokenService(settings.auth).create_token(username, roles)
        return {"Authorization": f"Bearer {issued.token}"}

    return make
