"""Application services."""

from songcatalog.application.services.auth_service import AuthService
from songcatalog.application.services.notification_service import NotificationService
from songcatalog.application.services.song_read_service import (
    SEARCHABLE_KEYS,
    SongReadService,
)
from songcatalog.application.services.song_write_service import SongWriteService

__all__ = [
    "SEARCHABLE_KEYS",
    "AuthService",
    "NotificationService",
    "SongReadService",
    "SongWriteService",
]
