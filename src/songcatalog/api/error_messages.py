"""User-facing texts for the typed write-path results.

REST and GraphQL render the same wording, only the transport differs.
"""

from songcatalog.domain.errors import (
    ArtistExists,
    CreateError,
    SongNotExists,
    TitleExists,
    UpdateError,
    VersionInvalid,
    VersionOutdated,
)


def create_error_message(error: CreateError) -> str:
    """Text for a failed create."""
    if isinstance(error, TitleExists):
        return f'The title "{error.title}" already exists.'
    if isinstance(error, ArtistExists):
        return f'The artist "{error.name}" already exists.'
    raise TypeError(f"Unknown create error: {error!r}")


def update_error_message(error: UpdateError) -> str:
    """Text for a failed update."""
    if isinstance(error, SongNotExists):
        return f'There is no song with the id "{error.id}".'
    if isinstance(error, VersionInvalid):
        return f'The version number "{error.version}" is invalid.'
    if isinstance(error, VersionOutdated):
        return f'The version number "{error.version}" is outdated.'
    raise TypeError(f"Unknown update error: {error!r}")
