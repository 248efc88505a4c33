"""Typed result variants for expected failures of the song read/write path.

Hey future me - the write service RETURNS these, it never raises them! Callers check with
isinstance() (or match on .kind) and turn them into transport errors. Message texts are
the boundary's job (REST router), not ours.
"""

from dataclasses import dataclass
from typing import ClassVar, Literal, TypeAlias


@dataclass(frozen=True)
class TitleExists:
    """A song with this title already exists (create)."""

    kind: ClassVar[Literal["TitleExists"]] = "TitleExists"
    title: str


@dataclass(frozen=True)
class ArtistExists:
    """An artist with this name already exists (create)."""

    kind: ClassVar[Literal["ArtistExists"]] = "ArtistExists"
    name: str


@dataclass(frozen=True)
class VersionInvalid:
    """The concurrency token is missing or not of the form ``"<digits>"``."""

    kind: ClassVar[Literal["VersionInvalid"]] = "VersionInvalid"
    version: str | None


@dataclass(frozen=True)
class VersionOutdated:
    """The client version is lower than the persisted version."""

    kind: ClassVar[Literal["VersionOutdated"]] = "VersionOutdated"
    id: int
    version: int


@dataclass(frozen=True)
class SongNotExists:
    """No song exists at the id that should be updated."""

    kind: ClassVar[Literal["SongNotExists"]] = "SongNotExists"
    id: int | None


@dataclass(frozen=True)
class InvalidCriteria:
    """Search criteria contained keys that are not searchable."""

    kind: ClassVar[Literal["InvalidCriteria"]] = "InvalidCriteria"
    keys: tuple[str, ...]


CreateError: TypeAlias = TitleExists | ArtistExists
UpdateError: TypeAlias = SongNotExists | VersionInvalid | VersionOutdated

__all__ = [
    "ArtistExists",
    "CreateError",
    "InvalidCriteria",
    "SongNotExists",
    "TitleExists",
    "UpdateError",
    "VersionInvalid",
    "VersionOutdated",
]
