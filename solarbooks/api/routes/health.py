"""Liveness and database health endpoints."""

import time

from fastapi import APIRouter

from solarbooks import __version__
from solarbooks.application.dto.responses import HealthResponse
from solarbooks.config import get_logger, get_settings

logger = get_logger(__name__)

router = APIRouter(prefix="/api/health", tags=["health"])

_start_time = time.monotonic()


def _uptime() -> float:
    return round(time.monotonic() - _start_time, 3)


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        uptime_seconds=_uptime(),
        environment=get_settings().environment,
    )


@router.get("/db", response_model=HealthResponse)
async def db_health() -> HealthResponse:
    """Check a pooled connection and report the applied schema version."""
    from solarbooks.infrastructure.storage.sqlite import get_pool

    schema_version = None
    try:
        pool = await get_pool()
        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT MAX(version) FROM schema_migrations")
            schema_version = (await cursor.fetchone())[0]
        db_status = "ok"
    except Exception as e:
        logger.warning("db_health_failed", error=str(e))
        db_status = f"error: {e}"

    return HealthResponse(
        status="healthy" if db_status == "ok" else "unhealthy",
        version=__version__,
        uptime_seconds=_uptime(),
        database=db_status,
        schema_version=schema_version,
        environment=get_settings().environment,
    )
