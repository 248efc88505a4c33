"""Infrastructure persistence layer."""

from .database import Database
from .models import ArtistModel, Base, SongModel
from .query_builder import TAG_CRITERIA, SongQueryBuilder
from .repositories import SongRepository

__all__ = [
    # Database
    "Database",
    "Base",
    # Models
    "SongModel",
    "ArtistModel",
    # Queries
    "SongQueryBuilder",
    "TAG_CRITERIA",
    # Repositories
    "SongRepository",
]
