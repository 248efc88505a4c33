"""Song REST endpoints: lookup, search, create, update, delete.

Hey future me - the services hand back typed results, THIS module decides status codes.
Message texts come from api.error_messages (shared with GraphQL). Writes need a bearer
token with the right role. The optimistic locking handshake is plain HTTP:
- GET /rest/{id} answers with ETag: "<version>", If-None-Match with that value gives 304
- PUT /rest/{id} needs If-Match: "<version>" (428 without it, 412 on any version problem)
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from songcatalog.api.dependencies import (
    DELETE_ROLES,
    WRITE_ROLES,
    get_song_read_service,
    get_song_write_service,
    require_roles,
)
from songcatalog.api.error_messages import create_error_message, update_error_message
from songcatalog.api.schemas import (
    SongCreateDTO,
    SongListResponse,
    SongResponse,
    SongUpdateDTO,
)
from songcatalog.application.services import SongReadService, SongWriteService
from songcatalog.domain.errors import CreateError, UpdateError, VersionInvalid
from songcatalog.domain.value_objects import format_version_token, parse_version_token

logger = logging.getLogger(__name__)

router = APIRouter()


def _base_uri(request: Request) -> str:
    return str(request.url_for("find_songs")).rstrip("/")


def _dump(model: SongResponse) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _plain_text(status_code: int, message: str) -> PlainTextResponse:
    logger.debug("status=%s message=%s", status_code, message)
    return PlainTextResponse(message, status_code=status_code)


def _create_error_response(error: CreateError) -> PlainTextResponse:
    return _plain_text(status.HTTP_422_UNPROCESSABLE_ENTITY, create_error_message(error))


def _update_error_response(error: UpdateError) -> PlainTextResponse:
    return _plain_text(status.HTTP_412_PRECONDITION_FAILED, update_error_message(error))


@router.get("/{song_id}", name="find_song_by_id")
async def find_by_id(
    song_id: int,
    request: Request,
    if_none_match: str | None = Header(default=None),
    read_service: SongReadService = Depends(get_song_read_service),
) -> Response:
    """Get one song by id.

    Returns 304 if If-None-Match carries the current version, 404 if there is no such song.
    """
    song = await read_service.find_by_id(song_id)
    if song is None:
        logger.debug("find_by_id: no song %s", song_id)
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    assert song.version is not None  # for mypy
    etag = format_version_token(song.version)
    if if_none_match == etag:
        logger.debug("find_by_id: not modified (%s)", etag)
        return Response(status_code=status.HTTP_304_NOT_MODIFIED, headers={"ETag": etag})

    body = SongResponse.from_entity(song, _base_uri(request))
    return JSONResponse(content=_dump(body), headers={"ETag": etag})


# Yo, every query parameter is a search criterion (?title=a&rock=true). Unknown keys or values
# that don't fit the column are no error, they just find nothing - same 404 as an empty result.
@router.get("", name="find_songs")
async def find(
    request: Request,
    read_service: SongReadService = Depends(get_song_read_service),
) -> Response:
    """Search songs by query parameters, all songs without any."""
    criteria = dict(request.query_params)
    songs = await read_service.find(criteria)
    if not songs:
        logger.debug("find: nothing found for %s", criteria)
        return Response(status_code=status.HTTP_404_NOT_FOUND)

    base_uri = _base_uri(request)
    body = SongListResponse(
        embedded={"songs": [SongResponse.from_entity(s, base_uri, all_links=False) for s in songs]}
    )
    return JSONResponse(content=body.model_dump(mode="json", by_alias=True, exclude_none=True))


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_roles(*WRITE_ROLES))],
)
async def create(
    payload: SongCreateDTO,
    request: Request,
    write_service: SongWriteService = Depends(get_song_write_service),
) -> Response:
    """Create a song with its artists. 201 with Location, 422 if title or artist exist."""
    result = await write_service.create(payload.to_entity())
    if not isinstance(result, int):
        return _create_error_response(result)

    location = f"{_base_uri(request)}/{result}"
    logger.debug("create: location=%s", location)
    return Response(status_code=status.HTTP_201_CREATED, headers={"Location": location})


@router.put("/{song_id}", dependencies=[Depends(require_roles(*WRITE_ROLES))])
async def update(
    song_id: int,
    payload: SongUpdateDTO,
    if_match: str | None = Header(default=None),
    write_service: SongWriteService = Depends(get_song_write_service),
) -> Response:
    """Update the content fields of a song. 204 with the new ETag on success."""
    if if_match is None:
        return _plain_text(
            status.HTTP_428_PRECONDITION_REQUIRED, 'Header "If-Match" is missing.'
        )

    version = parse_version_token(if_match)
    if isinstance(version, VersionInvalid):
        return _update_error_response(version)

    result = await write_service.update(song_id, payload.to_entity(), version)
    if not isinstance(result, int):
        return _update_error_response(result)

    return Response(
        status_code=status.HTTP_204_NO_CONTENT,
        headers={"ETag": format_version_token(result)},
    )


@router.delete(
    "/{song_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_roles(*DELETE_ROLES))],
)
async def delete(
    song_id: int,
    write_service: SongWriteService = Depends(get_song_write_service),
) -> Response:
    """Delete a song and its artists. 204 whether or not it existed."""
    deleted = await write_service.delete(song_id)
    logger.debug("delete: id=%s deleted=%s", song_id, deleted)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
