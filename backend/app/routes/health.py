"""
Postboard Backend — Health Check & Root Routes
================================================

What:  GET /health for monitoring probes, GET / for a service banner.
Why:   Load balancers and Docker health checks need to know whether the
       service can reach its database.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Request, Response

from app import __version__
from app.schemas.common import HealthResponse, ServiceInfoResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level: initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the health status of the backend service and its database. "
        "Used by Docker health checks and load balancers."
    ),
)
async def health_check(request: Request, response: Response) -> HealthResponse:
    """
    Probe the database with SELECT 1 and report aggregate status.

    Returns 503 when the database is unreachable so orchestrators stop
    routing traffic to this instance.
    """
    db_ok = await request.app.state.database.health_check()
    if not db_ok:
        response.status_code = 503

    return HealthResponse(
        status="healthy" if db_ok else "unhealthy",
        version=__version__,
        database="connected" if db_ok else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )


@router.get("/", response_model=ServiceInfoResponse, include_in_schema=False)
async def root() -> ServiceInfoResponse:
    return ServiceInfoResponse(name="Postboard API", version=__version__, docs_url="/docs")
