"""API router initialization."""

# Hey future me, this aggregates the routers. main.py mounts api_router at the root, the
# prefixes here give /rest/... for songs, /auth/token for logins and /health/...
# for the probes. GraphQL lives in api.graphql and is mounted by main.py.

from fastapi import APIRouter

from songcatalog.api.routers import auth, health, songs

api_router = APIRouter()

api_router.include_router(songs.router, prefix="/rest", tags=["Songs"])
api_router.include_router(health.router, prefix="/health", tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])

__all__ = ["api_router"]
