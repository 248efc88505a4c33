"""Tests for Database session management and seeding."""

import pytest
from sqlalchemy import func, select

from songcatalog.infrastructure.persistence import Database
from songcatalog.infrastructure.persistence.models import ArtistModel, SongModel
from songcatalog.infrastructure.persistence.populate import SEED_SONGS, populate_database


class TestSessionScope:
    """session_scope() commits on success and rolls back on error."""

    async def test_commits_on_clean_exit(self, db: Database) -> None:
        async with db.session_scope() as session:
            session.add(SongModel(title="Imagine", rating=5))

        async with db.session_scope() as session:
            count = await session.scalar(select(func.count()).select_from(SongModel))
        assert count == 1

    async def test_rolls_back_on_error(self, db: Database) -> None:
        with pytest.raises(RuntimeError):
            async with db.session_scope() as session:
                session.add(SongModel(title="Imagine", rating=5))
                await session.flush()
                raise RuntimeError("boom")

        async with db.session_scope() as session:
            count = await session.scalar(select(func.count()).select_from(SongModel))
        assert count == 0

    async def test_new_song_starts_at_version_zero(self, db: Database) -> None:
        async with db.session_scope() as session:
            song = SongModel(title="Imagine", rating=5)
            session.add(song)
            await session.flush()

            assert song.version == 0


async def test_check_connection(db: Database) -> None:
    assert await db.check_connection() is True


async def test_populate_replaces_existing_rows(db: Database) -> None:
    async with db.session_scope() as session:
        session.add(SongModel(title="Leftover", rating=1))

    seeded = await populate_database(db)

    async with db.session_scope() as session:
        titles = (await session.scalars(select(SongModel.title))).all()
        artists = await session.scalar(select(func.count()).select_from(ArtistModel))
    assert seeded == len(SEED_SONGS)
    assert "Leftover" not in titles
    assert len(titles) == len(SEED_SONGS)
    assert artists == sum(len(seed["artists"]) for seed in SEED_SONGS)
