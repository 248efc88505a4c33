"""Repository implementations for domain entities."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from songcatalog.domain.entities import Artist, Song, SongKind
from songcatalog.domain.exceptions import EntityNotFoundException, OptimisticLockException
from songcatalog.domain.ports import ISongRepository

from .models import ArtistModel, SongModel, ensure_utc_aware, utc_now
from .query_builder import SongQueryBuilder, keywords_from_column, keywords_to_column

logger = logging.getLogger(__name__)


class SongRepository(ISongRepository):
    """SQLAlchemy implementation of the Song repository."""

    # Hey future me, this is the Repository pattern! The AsyncSession is injected and shared with
    # the services of the same request. The repo NEVER commits - it stages and flushes, the write
    # service decides commit vs rollback. Don't open your own session in here or the optimistic
    # lock check runs against a different identity map than the one the service read from!
    def __init__(
        self, session: AsyncSession, query_builder: SongQueryBuilder | None = None
    ) -> None:
        """Initialize repository with session."""
        self.session = session
        self.query_builder = query_builder or SongQueryBuilder()

    async def get_by_id(self, song_id: int) -> Song | None:
        """Get a song with its artists by id."""
        result = await self.session.execute(self.query_builder.build_id(song_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_by_title(self, title: str) -> Song | None:
        """Get a song by its exact title."""
        result = await self.session.execute(self.query_builder.build_title(title))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find(self, criteria: Mapping[str, Any]) -> list[Song]:
        """Find songs matching pre-validated search criteria, ordered by id."""
        result = await self.session.execute(self.query_builder.build(criteria))
        return [self._to_entity(model) for model in result.scalars().all()]

    async def existing_artist_names(self, names: Iterable[str]) -> list[str]:
        """Return those of the given artist names that are already stored."""
        wanted = list(dict.fromkeys(names))
        if not wanted:
            return []
        result = await self.session.execute(
            self.query_builder.build_artist_names(wanted)
        )
        return list(result.scalars().all())

    # Yo, add() converts the domain Song into SongModel + ArtistModels and FLUSHES so the DB hands
    # out the id and the version generator sets version=0. Still uncommitted afterwards!
    async def add(self, song: Song) -> Song:
        """Stage and flush a new song with its artists."""
        model = SongModel(
            title=song.title,
            rating=song.rating,
            kind=song.kind.value if song.kind else None,
            release_date=song.release_date,
            keywords=keywords_to_column(song.keywords),
            artists=[ArtistModel(name=artist.name) for artist in song.artists],
        )
        self.session.add(model)
        await self.session.flush()
        logger.debug("add: id=%s version=%s", model.id, model.version)
        return self._to_entity(model)

    # Listen up, update() works on the SongModel the read path already loaded into this session
    # (identity map), so the UPDATE is guarded by the version WE read. If song.version doesn't
    # match what the session holds, or another writer committed in between (StaleDataError on
    # flush), we raise OptimisticLockException - the caller rolls back.
    async def update(self, song: Song) -> int:
        """Write the content fields of a persisted song, return the new version."""
        if song.id is None:
            raise EntityNotFoundException("Song", song.id)
        model = await self.session.get(SongModel, song.id)
        if model is None:
            raise EntityNotFoundException("Song", song.id)
        if model.version != song.version:
            raise OptimisticLockException("Song", song.id, song.version)

        model.title = song.title
        model.rating = song.rating
        model.kind = song.kind.value if song.kind else None
        model.release_date = song.release_date
        model.keywords = keywords_to_column(song.keywords)
        # Always touch updated_at so an update without net changes still issues the UPDATE
        # and bumps the version exactly once.
        model.updated_at = utc_now()

        try:
            await self.session.flush()
        except StaleDataError as e:
            raise OptimisticLockException("Song", song.id, song.version) from e

        logger.debug("update: id=%s version=%s", model.id, model.version)
        return model.version

    async def delete(self, song: Song) -> bool:
        """Delete all artist rows of the song, then the song row.

        Both statements run in the caller's transaction; the caller commits or rolls back.
        """
        artist_result = await self.session.execute(
            delete(ArtistModel).where(ArtistModel.song_id == song.id)
        )
        song_result = await self.session.execute(
            delete(SongModel).where(SongModel.id == song.id)
        )
        artists_deleted = artist_result.rowcount  # type: ignore[attr-defined]
        songs_deleted = song_result.rowcount  # type: ignore[attr-defined]
        logger.debug(
            "delete: id=%s artists_deleted=%s songs_deleted=%s",
            song.id,
            artists_deleted,
            songs_deleted,
        )
        return songs_deleted > 0

    @staticmethod
    def _to_entity(model: SongModel) -> Song:
        return Song(
            id=model.id,
            version=model.version,
            title=model.title,
            rating=model.rating,
            kind=SongKind(model.kind) if model.kind else None,
            release_date=model.release_date,
            keywords=keywords_from_column(model.keywords),
            artists=[Artist(id=a.id, name=a.name) for a in model.artists],
            created_at=ensure_utc_aware(model.created_at) if model.created_at else None,
            updated_at=ensure_utc_aware(model.updated_at) if model.updated_at else None,
        )
