"""API request/response schemas."""

from songcatalog.api.schemas.auth import LoginRequest, TokenResponse
from songcatalog.api.schemas.song import (
    ArtistDTO,
    Link,
    SongCreateDTO,
    SongLinks,
    SongListResponse,
    SongResponse,
    SongUpdateDTO,
)

__all__ = [
    "ArtistDTO",
    "Link",
    "LoginRequest",
    "SongCreateDTO",
    "SongLinks",
    "SongListResponse",
    "SongResponse",
    "SongUpdateDTO",
    "TokenResponse",
]
