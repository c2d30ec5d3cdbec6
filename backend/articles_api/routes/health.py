"""
Articles API — Health Check Route
==================================

What:  Health check endpoint for monitoring and load balancer probes.
Why:   Load balancers need to know whether this instance can serve traffic.
How:   Asks the active repository for a lightweight connectivity probe.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   Storage reachable (HTTP 200)
    - unhealthy: Storage unreachable (HTTP 503, stop routing traffic)
"""

import logging
import time

from fastapi import APIRouter, Depends, Response

from articles_api import __version__
from articles_api.dependencies import get_article_repository
from articles_api.repositories.base import ArticleRepository
from articles_api.schemas.article import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Module-level: initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Storage unreachable", "model": HealthResponse}},
    summary="Service health check",
    description=(
        "Returns the health status of the service and its storage. "
        "Used by Docker health checks and load balancers."
    ),
)
async def health_check(
    response: Response,
    repository: ArticleRepository = Depends(get_article_repository),
) -> HealthResponse:
    """
    Probe the article store and report aggregate status.

    Database: SELECT 1 for the SQL store; always reachable for the memory store.
    """
    reachable = await repository.health_check()
    if not reachable:
        response.status_code = 503

    return HealthResponse(
        status="healthy" if reachable else "unhealthy",
        version=__version__,
        store=repository.store_name,
        database="connected" if reachable else "disconnected",
        uptime_seconds=round(time.time() - _start_time, 2),
    )
