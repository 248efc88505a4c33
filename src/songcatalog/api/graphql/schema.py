"""GraphQL schema: song queries plus create/update/delete/login mutations.

Hey future me - this is a THIN layer over SongReadService/SongWriteService, exactly like the
REST router. Input goes through the same pydantic DTOs as REST so both surfaces accept and
reject the same data, and typed write results become BadUserInputError with the same texts.
Field names are camelCase on the wire (strawberry converts release_date -> releaseDate).
"""

import logging
from datetime import date
from typing import Annotated, Any

import strawberry
from pydantic import BaseModel, ValidationError
from strawberry.types import Info

from songcatalog.api.dependencies import DELETE_ROLES, WRITE_ROLES
from songcatalog.api.error_messages import create_error_message, update_error_message
from songcatalog.api.graphql.context import SongContext
from songcatalog.api.graphql.errors import (
    BadUserInputError,
    ForbiddenError,
    UnauthenticatedError,
)
from songcatalog.api.schemas import SongCreateDTO, SongUpdateDTO
from songcatalog.domain.entities import Song, SongKind
from songcatalog.domain.exceptions import ValidationException
from songcatalog.infrastructure.security import TokenClaims

logger = logging.getLogger(__name__)

SongKindType = strawberry.enum(SongKind, name="SongKind")

SongInfo = Info[SongContext, None]


@strawberry.type(name="Artist")
class ArtistType:
    name: str


@strawberry.type(name="Song")
class SongType:
    id: int
    version: int
    title: str
    rating: int | None
    kind: SongKindType | None
    release_date: date | None
    keywords: list[str]
    artists: list[ArtistType]

    @classmethod
    def from_entity(cls, song: Song) -> "SongType":
        assert song.id is not None and song.version is not None  # for mypy
        return cls(
            id=song.id,
            version=song.version,
            title=song.title,
            rating=song.rating,
            kind=song.kind,
            release_date=song.release_date,
            keywords=list(song.keywords),
            artists=[ArtistType(name=artist.name) for artist in song.artists],
        )


@strawberry.type
class LoginResult:
    token: str
    expires_in: int
    roles: list[str]


@strawberry.input
class ArtistInput:
    name: str


@strawberry.input
class SongInput:
    title: str
    rating: int
    kind: SongKindType | None = None
    release_date: date | None = None
    keywords: list[str] = strawberry.field(default_factory=list)
    artists: list[ArtistInput] | None = None


@strawberry.input
class SongUpdateInput:
    id: int
    version: int
    title: str
    rating: int
    kind: SongKindType | None = None
    release_date: date | None = None
    keywords: list[str] = strawberry.field(default_factory=list)


def _validate(model: type[BaseModel], data: dict[str, Any]) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        )
        raise BadUserInputError(f"Invalid input: {details}") from e


def _to_entity(dto: SongCreateDTO | SongUpdateDTO) -> Song:
    try:
        return dto.to_entity()
    except ValidationException as e:
        raise BadUserInputError(e.message) from e


def _require_roles(info: SongInfo, *roles: str) -> TokenClaims:
    user = info.context.user
    if user is None:
        raise UnauthenticatedError()
    if not user.has_any_role(*roles):
        raise ForbiddenError(f"User {user.username!r} lacks role {' or '.join(roles)}")
    return user


@strawberry.type
class Query:
    @strawberry.field(description="One song by id")
    async def song(
        self, info: SongInfo, song_id: Annotated[int, strawberry.argument(name="id")]
    ) -> SongType:
        logger.debug("song: id=%s", song_id)
        song = await info.context.read_service.find_by_id(song_id)
        if song is None:
            raise BadUserInputError(f'There is no song with the id "{song_id}".')
        return SongType.from_entity(song)

    @strawberry.field(description="Songs whose title contains titleFilter, all songs without it")
    async def songs(self, info: SongInfo, title_filter: str | None = None) -> list[SongType]:
        logger.debug("songs: title_filter=%r", title_filter)
        criteria = {} if title_filter is None else {"title": title_filter}
        songs = await info.context.read_service.find(criteria)
        if not songs:
            raise BadUserInputError("No songs were found.")
        return [SongType.from_entity(song) for song in songs]


@strawberry.type
class Mutation:
    @strawberry.mutation(description="Create a song, returns its id")
    async def create(
        self, info: SongInfo, data: Annotated[SongInput, strawberry.argument(name="input")]
    ) -> int:
        _require_roles(info, *WRITE_ROLES)
        dto: SongCreateDTO = _validate(SongCreateDTO, strawberry.asdict(data))
        result = await info.context.write_service.create(_to_entity(dto))
        if not isinstance(result, int):
            raise BadUserInputError(create_error_message(result))
        logger.debug("create: id=%s", result)
        return result

    @strawberry.mutation(description="Update a song, returns the new version")
    async def update(
        self, info: SongInfo, data: Annotated[SongUpdateInput, strawberry.argument(name="input")]
    ) -> int:
        _require_roles(info, *WRITE_ROLES)
        values = strawberry.asdict(data)
        song_id = values.pop("id")
        version = values.pop("version")
        dto: SongUpdateDTO = _validate(SongUpdateDTO, values)
        result = await info.context.write_service.update(song_id, _to_entity(dto), version)
        if not isinstance(result, int):
            raise BadUserInputError(update_error_message(result))
        logger.debug("update: id=%s version=%s", song_id, result)
        return result

    @strawberry.mutation(description="Delete a song, true if it existed")
    async def delete(
        self, info: SongInfo, song_id: Annotated[int, strawberry.argument(name="id")]
    ) -> bool:
        _require_roles(info, *DELETE_ROLES)
        return await info.context.write_service.delete(song_id)

    @strawberry.mutation(description="Log in and receive a bearer token")
    async def login(self, info: SongInfo, username: str, password: str) -> LoginResult:
        issued = info.context.auth_service.login(username, password)
        if issued is None:
            raise BadUserInputError("Wrong username or password")
        return LoginResult(
            token=issued.token, expires_in=issued.expires_in, roles=list(issued.roles)
        )


schema = strawberry.Schema(query=Query, mutation=Mutation)
