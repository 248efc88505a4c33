"""FastAPI application factory and entry point.

Run with:
    songcatalog                      # console script, see run()
    uvicorn songcatalog.main:create_app --factory --reload
"""

import uvicorn
from fastapi import FastAPI

from songcatalog import __version__
from songcatalog.api.exception_handlers import register_exception_handlers
from songcatalog.api.graphql import graphql_router
from songcatalog.api.routers import api_router
from songcatalog.config import Settings, get_settings
from songcatalog.infrastructure.lifecycle import lifespan
from songcatalog.infrastructure.observability import RequestLoggingMiddleware


# Hey future me, settings are EXPLICIT here: tests pass their own Settings, production passes
# nothing and get_settings() reads the environment once. The object lives on app.state.settings
# and reaches everything else through the lifespan and Depends(get_app_settings).
def create_app(settings: Settings | None = None) -> FastAPI:
    """Create the FastAPI application.

    Args:
        settings: Settings to use. None reads them from the environment

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Song Catalog",
        description="CRUD backend for songs and their artists with optimistic locking",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestLoggingMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)
    app.include_router(graphql_router, prefix="/graphql", tags=["GraphQL"])

    return app


def run() -> None:
    """Console script entry point."""
    uvicorn.run(
        "songcatalog.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )
