"""Per-request GraphQL context built from the regular FastAPI dependencies."""

from fastapi import Depends
from strawberry.fastapi import BaseContext

from songcatalog.api.dependencies import (
    get_auth_service,
    get_current_user,
    get_song_read_service,
    get_song_write_service,
)
from songcatalog.application.services import AuthService, SongReadService, SongWriteService
from songcatalog.infrastructure.security import TokenClaims


class SongContext(BaseContext):
    """Services and the caller's token claims for one GraphQL request."""

    def __init__(
        self,
        read_service: SongReadService,
        write_service: SongWriteService,
        auth_service: AuthService,
        user: TokenClaims | None,
    ) -> None:
        super().__init__()
        self.read_service = read_service
        self.write_service = write_service
        self.auth_service = auth_service
        self.user = user


# Hey future me, this is a normal FastAPI dependency! Same session, same services as the REST
# routes. A broken bearer token fails the whole HTTP request with 401 before any resolver runs.
async def get_graphql_context(
    read_service: SongReadService = Depends(get_song_read_service),
    write_service: SongWriteService = Depends(get_song_write_service),
    auth_service: AuthService = Depends(get_auth_service),
    user: TokenClaims | None = Depends(get_current_user),
) -> SongContext:
    """Build the GraphQL context."""
    return SongContext(read_service, write_service, auth_service, user)
