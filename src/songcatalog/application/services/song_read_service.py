"""Read path for songs: lookup by id and search by criteria."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from songcatalog.domain.entities import SONG_FIELDS, Song
from songcatalog.domain.errors import InvalidCriteria
from songcatalog.domain.ports import ISongRepository
from songcatalog.infrastructure.persistence.query_builder import (
    TAG_CRITERIA,
    fits_integer_column,
)

logger = logging.getLogger(__name__)

SEARCHABLE_KEYS: frozenset[str] = frozenset(SONG_FIELDS) | frozenset(TAG_CRITERIA)


class SongReadService:
    """Service for reading songs.

    Hey future me - find() is FAIL-CLOSED! A criterion key outside SEARCHABLE_KEYS or a
    value that can't be coerced to its column type gives an empty list, no error and
    (for bad keys) no query at all. The REST layer turns the empty list into a 404.
    """

    def __init__(self, repository: ISongRepository) -> None:
        """Initialize read service.

        Args:
            repository: Song repository bound to the request session
        """
        self.repository = repository

    async def find_by_id(self, song_id: int) -> Song | None:
        """Find a song with its artists by id, None if absent."""
        logger.debug("find_by_id: id=%s", song_id)
        if not fits_integer_column(song_id):
            logger.debug("find_by_id: id %s out of column range", song_id)
            return None
        song = await self.repository.get_by_id(song_id)
        logger.debug("find_by_id: found=%s", song is not None)
        return song

    async def find(self, criteria: Mapping[str, Any] | None = None) -> list[Song]:
        """Find songs matching all criteria.

        Args:
            criteria: Field name (or tag pseudo-criterion) -> raw value.
                None and {} both mean "all songs".

        Returns:
            Matching songs ordered by id, [] for illegal keys or uncoercible values
        """
        criteria = dict(criteria or {})
        invalid = self._check_keys(criteria)
        if invalid is not None:
            logger.debug("find: invalid criteria keys %s", invalid.keys)
            return []

        try:
            songs = await self.repository.find(criteria)
        except ValueError as e:
            logger.debug("find: criteria value not usable: %s", e)
            return []

        logger.debug("find: %d songs", len(songs))
        return songs

    async def find_by_title(self, title: str) -> Song | None:
        """Find a song by its exact title."""
        return await self.repository.get_by_title(title)

    async def find_existing_artist_names(self, names: Iterable[str]) -> list[str]:
        """Return those of the given artist names that are already stored."""
        return await self.repository.existing_artist_names(names)

    @staticmethod
    def _check_keys(criteria: Mapping[str, Any]) -> InvalidCriteria | None:
        invalid = tuple(key for key in criteria if key not in SEARCHABLE_KEYS)
        return InvalidCriteria(keys=invalid) if invalid else None
