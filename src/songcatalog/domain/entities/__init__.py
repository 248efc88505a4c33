"""Domain entities."""

from dataclasses import dataclass, field, fields, replace
from datetime import date, datetime
from enum import Enum

from songcatalog.domain.exceptions import ValidationException

MAX_RATING = 5

# Keywords share one text column, joined by this separator.
KEYWORD_SEPARATOR = ","


# Hey future me, SongKind is a CLOSED set! The DB column is String(3) so a new kind needs a
# migration too, not just a new enum member. Stored as the plain value ("CD", "MP3").
class SongKind(str, Enum):
    """Release format of a song."""

    CD = "CD"
    MP3 = "MP3"


# Yo, Artist is an OWNED child of Song - it never exists on its own. It is created together
# with its song and deleted together with it. id is None until the DB assigned one. The back
# reference to the song only lives on the ORM model (song_id FK), the domain keeps it out.
@dataclass
class Artist:
    """Artist entity owned by a song."""

    name: str
    id: int | None = None

    def __post_init__(self) -> None:
        """Validate artist invariants."""
        if not self.name or not self.name.strip():
            raise ValidationException("Artist name must not be empty")


# Listen up, Song is the AGGREGATE ROOT. id/version/created_at/updated_at are server-assigned:
# the write service never copies them from a request. version starts at 0 and only the
# persistence layer increments it (SQLAlchemy version_id_col), never this class.
@dataclass
class Song:
    """Song entity with its owned artists."""

    title: str
    rating: int | None = None
    kind: SongKind | None = None
    release_date: date | None = None
    keywords: list[str] = field(default_factory=list)
    artists: list[Artist] = field(default_factory=list)
    id: int | None = None
    version: int | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def __post_init__(self) -> None:
        """Validate song invariants."""
        if not self.title or not self.title.strip():
            raise ValidationException("Song title must not be empty")
        if self.rating is not None and not 0 <= self.rating <= MAX_RATING:
            raise ValidationException(
                f"Song rating must be between 0 and {MAX_RATING}, got {self.rating}"
            )
        for keyword in self.keywords:
            if not keyword.strip() or KEYWORD_SEPARATOR in keyword:
                raise ValidationException(f"Invalid song keyword: {keyword!r}")

    def merge(self, changes: "Song") -> "Song":
        """Return a copy of this song with the content fields of ``changes`` applied.

        Only content fields that are set (not None) on ``changes`` are taken over.
        Identity, version, timestamps and the artists collection always stay as they
        are on ``self``.
        """
        values = {
            name: getattr(changes, name)
            for name in MERGEABLE_FIELDS
            if getattr(changes, name) is not None
        }
        return replace(self, **values)


# Hey future me - these are the LEGAL top-level field names for search criteria! The artists
# relationship is not a column, so it can't be compared with "=" and is left out on purpose.
SONG_FIELDS: tuple[str, ...] = tuple(f.name for f in fields(Song) if f.name != "artists")

MERGEABLE_FIELDS: tuple[str, ...] = ("title", "rating", "kind", "release_date", "keywords")

__all__ = [
    "KEYWORD_SEPARATOR",
    "MAX_RATING",
    "MERGEABLE_FIELDS",
    "SONG_FIELDS",
    "Artist",
    "Song",
    "SongKind",
]
