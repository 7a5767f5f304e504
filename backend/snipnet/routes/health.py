"""
Snipnet Backend — Health Check Route
======================================

What:  Health check endpoint for monitoring and load balancer probes.
Why:   Load balancers route away from instances that cannot reach their store.
How:   Asks the configured SnippetStore for a lightweight connectivity probe.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   Store reachable (or in-memory)
    - unhealthy: Database unreachable
"""

import logging
import time

from fastapi import APIRouter, Depends

from snipnet import __version__
from snipnet.dependencies import get_snippet_store
from snipnet.schemas.snippet import HealthResponse
from snipnet.services.snippet_store import SnippetStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    store: SnippetStore = Depends(get_snippet_store),
) -> HealthResponse:
    """
    Check the health of the service and its store.

    SQL stores run SELECT 1; the in-memory store is always reachable.
    """
    database = await store.health_check()
    overall = "unhealthy" if database == "disconnected" else "healthy"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=database,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
