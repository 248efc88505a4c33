"""Domain ports (interfaces) for dependency inversion."""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from typing import Any

from songcatalog.domain.entities import Song

# Notification system interfaces
from songcatalog.domain.ports.notification import (
    INotificationProvider,
    Notification,
    NotificationPriority,
    NotificationResult,
    NotificationType,
)


# Hey future me, ISongRepository is a PORT (Hexagonal Architecture)! The services only know this
# contract, the SQLAlchemy implementation lives in infrastructure/persistence. Repos NEVER commit -
# the write service owns the transaction boundary (commit/rollback), the repo only stages + flushes.
class ISongRepository(ABC):
    """Repository interface for Song aggregates."""

    @abstractmethod
    async def get_by_id(self, song_id: int) -> Song | None:
        """Get a song with its artists by id."""
        pass

    @abstractmethod
    async def get_by_title(self, title: str) -> Song | None:
        """Get a song by its exact title."""
        pass

    @abstractmethod
    async def find(self, criteria: Mapping[str, Any]) -> list[Song]:
        """Find songs matching pre-validated search criteria."""
        pass

    @abstractmethod
    async def existing_artist_names(self, names: Iterable[str]) -> list[str]:
        """Return those of the given artist names that are already stored."""
        pass

    @abstractmethod
    async def add(self, song: Song) -> Song:
        """Stage and flush a new song with its artists, return it with id/version set."""
        pass

    @abstractmethod
    async def update(self, song: Song) -> int:
        """Write the content fields of a persisted song, return the new version."""
        pass

    @abstractmethod
    async def delete(self, song: Song) -> bool:
        """Delete a song and all of its artists, True if the song row was deleted."""
        pass


__all__ = [
    "ISongRepository",
    "INotificationProvider",
    "Notification",
    "NotificationPriority",
    "NotificationResult",
    "NotificationType",
]
