"""API schemas for songs.

Hey future me - request DTOs never carry id or version! id comes from the path, version
from the If-Match header. Response models are HAL-ish: the id only shows up inside the
_links hrefs, the version only in the ETag header.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from songcatalog.domain.entities import KEYWORD_SEPARATOR, MAX_RATING, Artist, Song, SongKind


class ArtistDTO(BaseModel):
    """Schema for an artist inside a create request or a response."""

    name: str = Field(..., min_length=1, max_length=32, description="Unique artist name")

    def to_entity(self) -> Artist:
        """Build the domain Artist."""
        return Artist(name=self.name)


class SongUpdateDTO(BaseModel):
    """Request schema for updating a song (content fields only, no artists)."""

    rating: int = Field(..., ge=0, le=MAX_RATING, description="Rating from 0 to 5")
    kind: SongKind | None = Field(default=None, description="Release format: CD or MP3")
    release_date: date | None = Field(default=None, description="ISO-8601 release date")
    # PUT sends the full representation: no keywords in the body means no keywords.
    keywords: list[str] = Field(
        default_factory=list, description="Free-text keywords, unique, without commas"
    )
    title: str = Field(..., min_length=1, description="Song title")

    # Keywords are stored comma-separated, so a comma inside one would split it on the way back.
    @field_validator("keywords")
    @classmethod
    def _keywords_valid(cls, value: list[str]) -> list[str]:
        if len(set(value)) != len(value):
            raise ValueError("keywords must be unique")
        for keyword in value:
            if not keyword.strip():
                raise ValueError("keywords must not be empty")
            if KEYWORD_SEPARATOR in keyword:
                raise ValueError(f'keywords must not contain "{KEYWORD_SEPARATOR}"')
        return value

    def to_entity(self) -> Song:
        """Build a domain Song carrying the content fields of this request."""
        return Song(
            title=self.title,
            rating=self.rating,
            kind=self.kind,
            release_date=self.release_date,
            keywords=list(self.keywords),
        )


class SongCreateDTO(SongUpdateDTO):
    """Request schema for creating a song together with its artists."""

    artists: list[ArtistDTO] | None = Field(default=None, description="Artists of the song")

    def to_entity(self) -> Song:
        song = super().to_entity()
        song.artists = [artist.to_entity() for artist in self.artists or []]
        return song


class Link(BaseModel):
    """A single HAL link."""

    href: str


class SongLinks(BaseModel):
    """HAL links of a song. Search results only carry self."""

    model_config = ConfigDict(populate_by_name=True)

    self_: Link = Field(..., alias="self")
    list_: Link | None = Field(default=None, alias="list")
    add: Link | None = None
    update: Link | None = None
    remove: Link | None = None


class SongResponse(BaseModel):
    """Response schema for a single song."""

    model_config = ConfigDict(populate_by_name=True)

    rating: int | None = None
    kind: SongKind | None = None
    release_date: date | None = None
    keywords: list[str] = Field(default_factory=list)
    title: str
    artists: list[ArtistDTO] = Field(default_factory=list)
    links: SongLinks = Field(..., alias="_links")

    @classmethod
    def from_entity(cls, song: Song, base_uri: str, all_links: bool = True) -> "SongResponse":
        """Build the response model with links relative to ``base_uri``."""
        self_href = f"{base_uri}/{song.id}"
        links: dict[str, Any] = {"self": Link(href=self_href)}
        if all_links:
            links.update(
                list=Link(href=base_uri),
                add=Link(href=base_uri),
                update=Link(href=self_href),
                remove=Link(href=self_href),
            )
        return cls(
            rating=song.rating,
            kind=song.kind,
            release_date=song.release_date,
            keywords=song.keywords,
            title=song.title,
            artists=[ArtistDTO(name=artist.name) for artist in song.artists],
            links=SongLinks(**links),
        )


class SongListResponse(BaseModel):
    """Response schema for search results."""

    model_config = ConfigDict(populate_by_name=True)

    embedded: dict[str, list[SongResponse]] = Field(..., alias="_embedded")
