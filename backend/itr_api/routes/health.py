"""
ITR API: Health Check Route
===========================

What:  Liveness and database-connectivity probe for load balancers and
       container health checks.
How:   Runs SELECT 1 through the shared engine.

Status levels:
    healthy:    database reachable (HTTP 200)
    unhealthy:  database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from itr_api import __version__
from itr_api.database import verify_connection
from itr_api.schemas.employee import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module load time, used for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check():
    """Probe the database and report aggregate status and uptime."""
    db_status = "connected"
    overall = "healthy"

    try:
        await verify_connection()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    body = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
    if overall != "healthy":
        return JSONResponse(status_code=503, content=body.model_dump())
    return body
