"""
Field Manager Backend: Health Check Route
=========================================

GET /health (outside the API prefix):
    200 {"status": "healthy",   "database": "connected", ...}
    503 {"status": "unhealthy", "database": "disconnected", ...}

The database probe is a SELECT 1 bounded by PROBE_TIMEOUT_SECONDS, so a
hung connection pool reports unhealthy instead of stalling the probe.
"""

import asyncio
import logging
import time

from fastapi import APIRouter, Response, status
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine

from fieldmanager import __version__
from fieldmanager.database import engine
from fieldmanager.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

PROBE_TIMEOUT_SECONDS = 2.0

_started_at = time.monotonic()


async def database_reachable(db_engine: AsyncEngine, timeout: float = PROBE_TIMEOUT_SECONDS) -> bool:
    async def probe() -> None:
        async with db_engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    try:
        await asyncio.wait_for(probe(), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning("Health check: database probe timed out after %.1fs", timeout)
        return False
    except (SQLAlchemyError, OSError) as e:
        logger.warning("Health check: database unreachable: %s", str(e))
        return False
    return True


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
)
async def health_check(response: Response) -> HealthResponse:
    healthy = await database_reachable(engine)
    if not healthy:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="healthy" if healthy else "unhealthy",
        version=__version__,
        database="connected" if healthy else "disconnected",
        uptime_seconds=round(time.monotonic() - _started_at, 2),
    )
