"""
Course Information Service — Health Check Route
=================================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Asks the injected catalog service whether it can answer lookups.
Who:   Called by container health checks, load balancers and monitoring.

Status levels:
    - healthy:    catalog loaded, lookups are served
    - unhealthy:  catalog not loaded or service not configured; lookups answer 500
"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends

from course_information import __version__
from course_information.dependencies import find_course_information_service
from course_information.schemas.responses import HealthResponse
from course_information.services.catalog_base import CourseInformationService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description="Returns the health status of the service and its course catalog.",
)
async def health_check(
    service: Optional[CourseInformationService] = Depends(find_course_information_service),
) -> HealthResponse:
    catalog_status = "loaded"
    overall = "healthy"

    try:
        if service is None or not await service.health_check():
            catalog_status = "unavailable"
            overall = "unhealthy"
    except Exception as e:
        catalog_status = "unavailable"
        overall = "unhealthy"
        logger.warning("Health check: catalog service failed: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        catalog=catalog_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
