"""
Movie Store — Health Check Route
=================================

What:  Health check endpoint for monitoring and load balancers.
How:   The service has no external dependencies, so it is healthy whenever
       it can answer; the report adds the collection size and uptime.
Who:   Called by container health checks and monitoring systems.
"""

import time

from fastapi import APIRouter, Depends

from moviestore import __version__
from moviestore.schemas.movie import HealthResponse
from moviestore.store import MovieStore, get_movie_store

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(store: MovieStore = Depends(get_movie_store)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        version=__version__,
        movies=len(store),
        uptime_seconds=round(time.time() - _start_time, 2),
    )
