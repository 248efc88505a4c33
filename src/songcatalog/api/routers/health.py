"""Health check endpoints for Docker/Kubernetes probes.

- /health/live  -> Liveness probe (process is up, no dependency checks)
- /health/ready -> Readiness probe (database answers SELECT 1)
"""

from datetime import UTC, datetime

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from songcatalog.api.dependencies import get_database
from songcatalog.infrastructure.persistence import Database

router = APIRouter()


class LivenessStatus(BaseModel):
    """Simple liveness probe response."""

    status: str = Field(description="alive")
    timestamp: str = Field(description="ISO timestamp")


class ReadinessStatus(BaseModel):
    """Readiness probe response."""

    status: str = Field(description="ready or not_ready")
    timestamp: str = Field(description="ISO timestamp")
    database: bool = Field(description="Database connection OK")


@router.get("/live", response_model=LivenessStatus)
async def liveness_probe() -> LivenessStatus:
    """Liveness probe. Always 200 while the process runs."""
    return LivenessStatus(status="alive", timestamp=datetime.now(UTC).isoformat())


@router.get("/ready", response_model=ReadinessStatus)
async def readiness_probe(db: Database = Depends(get_database)) -> JSONResponse:
    """Readiness probe. 200 if the database is reachable, 503 otherwise."""
    db_ok = await db.check_connection()
    response = ReadinessStatus(
        status="ready" if db_ok else "not_ready",
        timestamp=datetime.now(UTC).isoformat(),
        database=db_ok,
    )
    status_code = status.HTTP_200_OK if db_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(content=response.model_dump(), status_code=status_code)
