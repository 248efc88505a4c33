"""Write path for songs: create, update with optimistic locking, delete.

Hey future me - this service OWNS the transaction! The repository only stages and
flushes, every public method here ends in exactly one commit or one rollback. Expected
business failures come back as typed results (songcatalog.domain.errors), exceptions
are for infrastructure trouble and always roll back before they propagate.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from songcatalog.application.services.notification_service import NotificationService
from songcatalog.application.services.song_read_service import SongReadService
from songcatalog.domain.entities import Song
from songcatalog.domain.errors import (
    ArtistExists,
    CreateError,
    SongNotExists,
    TitleExists,
    UpdateError,
    VersionOutdated,
)
from songcatalog.domain.exceptions import OptimisticLockException
from songcatalog.domain.ports import ISongRepository

logger = logging.getLogger(__name__)


class SongWriteService:
    """Service for creating, updating and deleting songs."""

    def __init__(
        self,
        session: AsyncSession,
        repository: ISongRepository,
        read_service: SongReadService,
        notification_service: NotificationService,
    ) -> None:
        """Initialize write service.

        Args:
            session: Request session (same one the repository uses)
            repository: Song repository
            read_service: Read service for the existence checks
            notification_service: Sends the song-created notification
        """
        self.session = session
        self.repository = repository
        self.read_service = read_service
        self.notification_service = notification_service

    async def create(self, song: Song) -> int | CreateError:
        """Create a new song together with its artists.

        Returns:
            The new id, or TitleExists / ArtistExists
        """
        logger.debug("create: title=%r artists=%s", song.title, [a.name for a in song.artists])

        if await self.read_service.find_by_title(song.title) is not None:
            return TitleExists(title=song.title)

        existing = await self.read_service.find_existing_artist_names(
            artist.name for artist in song.artists
        )
        if existing:
            return ArtistExists(name=existing[0])

        try:
            created = await self.repository.add(song)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.debug("create: id=%s version=%s", created.id, created.version)
        assert created.id is not None  # for mypy

        # The song is committed at this point. A failing mail relay must not turn a
        # successful create into an error response.
        try:
            await self.notification_service.send_song_created_notification(created)
        except Exception as e:
            logger.warning("create: notification for song %s failed: %s", created.id, e)

        return created.id

    # Listen up, version is the already-parsed client version (the REST layer unquotes the
    # If-Match header). Only a client version LOWER than the stored one is rejected; a
    # higher one is accepted and the stored version still moves up by exactly one. The
    # real race protection is the version-guarded UPDATE in the repository.
    async def update(self, song_id: int, song: Song, version: int) -> int | UpdateError:
        """Apply the content fields of ``song`` to the stored song ``song_id``.

        Returns:
            The new version, or SongNotExists / VersionOutdated
        """
        logger.debug("update: id=%s version=%s", song_id, version)

        persisted = await self.read_service.find_by_id(song_id)
        if persisted is None:
            return SongNotExists(id=song_id)

        assert persisted.version is not None  # for mypy
        if version < persisted.version:
            logger.debug(
                "update: client version %s < stored version %s", version, persisted.version
            )
            return VersionOutdated(id=song_id, version=version)

        merged = persisted.merge(song)
        try:
            new_version = await self.repository.update(merged)
            await self.session.commit()
        except OptimisticLockException:
            await self.session.rollback()
            logger.debug("update: lost the race for song %s", song_id)
            return VersionOutdated(id=song_id, version=version)
        except Exception:
            await self.session.rollback()
            raise

        logger.debug("update: id=%s new version=%s", song_id, new_version)
        return new_version

    async def delete(self, song_id: int) -> bool:
        """Delete a song and all of its artists.

        Returns:
            True if the song row was deleted, False if there was no such song
        """
        logger.debug("delete: id=%s", song_id)

        song = await self.read_service.find_by_id(song_id)
        if song is None:
            logger.debug("delete: no song %s", song_id)
            return False

        try:
            deleted = await self.repository.delete(song)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.debug("delete: id=%s deleted=%s", song_id, deleted)
        return deleted
