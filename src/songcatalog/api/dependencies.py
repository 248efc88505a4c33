"""Dependency injection for API endpoints."""

from collections.abc import AsyncGenerator, Callable
from typing import cast

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from songcatalog.application.services import (
    AuthService,
    NotificationService,
    SongReadService,
    SongWriteService,
)
from songcatalog.config import Settings
from songcatalog.domain.exceptions import AuthenticationError, AuthorizationError
from songcatalog.infrastructure.notifications import EmailNotificationProvider
from songcatalog.infrastructure.persistence import Database, SongRepository
from songcatalog.infrastructure.security import TokenClaims, TokenService


# Hey future me, settings are the ones create_app() hung on app.state - NOT get_settings()!
# That way tests can build an app with their own Settings and every dependency sees them.
def get_app_settings(request: Request) -> Settings:
    """Get the settings the app was created with."""
    return cast(Settings, request.app.state.settings)


def get_database(request: Request) -> Database:
    """Get the Database from app state.

    Raises:
        HTTPException: 503 if the lifespan did not initialize the database
    """
    db = getattr(request.app.state, "db", None)
    if db is None:
        raise HTTPException(status_code=503, detail="Database not initialized")
    return cast(Database, db)


# One session per request. session_scope() commits whatever is left on a clean exit and rolls
# back on exceptions; the write service commits/rolls back itself before that.
async def get_db_session(
    db: Database = Depends(get_database),
) -> AsyncGenerator[AsyncSession, None]:
    """Get a request-scoped database session."""
    async with db.session_scope() as session:
        yield session


def get_song_repository(session: AsyncSession = Depends(get_db_session)) -> SongRepository:
    """Get the song repository bound to the request session."""
    return SongRepository(session)


def get_song_read_service(
    repository: SongRepository = Depends(get_song_repository),
) -> SongReadService:
    """Get the song read service."""
    return SongReadService(repository)


def get_notification_service(
    settings: Settings = Depends(get_app_settings),
) -> NotificationService:
    """Get the notification service with the mail provider from settings."""
    return NotificationService([EmailNotificationProvider(settings.mail)])


# Yo, repository and read service are the SAME instances the read dependency got (FastAPI caches
# dependencies per request), so the write path sees exactly the session the read path loaded into.
def get_song_write_service(
    session: AsyncSession = Depends(get_db_session),
    repository: SongRepository = Depends(get_song_repository),
    read_service: SongReadService = Depends(get_song_read_service),
    notification_service: NotificationService = Depends(get_notification_service),
) -> SongWriteService:
    """Get the song write service."""
    return SongWriteService(session, repository, read_service, notification_service)


# Creating and updating is staff work, deleting is reserved for admins.
WRITE_ROLES = ("admin", "employee")
DELETE_ROLES = ("admin",)

_bearer = HTTPBearer(auto_error=False)


def get_token_service(settings: Settings = Depends(get_app_settings)) -> TokenService:
    """Get the JWT token service."""
    return TokenService(settings.auth)


def get_auth_service(
    settings: Settings = Depends(get_app_settings),
    token_service: TokenService = Depends(get_token_service),
) -> AuthService:
    """Get the login service."""
    return AuthService(settings.auth, token_service)


# Hey future me, no Authorization header means anonymous (None), a BROKEN token is a 401 right
# away. Reads don't care who calls; writes go through require_roles() below.
def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    token_service: TokenService = Depends(get_token_service),
) -> TokenClaims | None:
    """Get the verified token claims of the caller, None if anonymous."""
    if credentials is None:
        return None
    return token_service.decode_token(credentials.credentials)


def require_roles(*roles: str) -> Callable[..., TokenClaims]:
    """Build a dependency that admits callers holding at least one of ``roles``.

    Raises (from the dependency):
        AuthenticationError: anonymous caller (401)
        AuthorizationError: authenticated without a matching role (403)
    """

    def dependency(user: TokenClaims | None = Depends(get_current_user)) -> TokenClaims:
        if user is None:
            raise AuthenticationError("Authentication required")
        if not user.has_any_role(*roles):
            raise AuthorizationError(f"User {user.username!r} lacks role {' or '.join(roles)}")
        return user

    return dependency
