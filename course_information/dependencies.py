"""
Course Information Service — FastAPI Dependencies
===================================================

What:  Dependency functions handing the catalog service to route handlers.
How:   main.py stores the service on `app.state` during startup; routes declare
       `Depends(get_course_information_service)`. Tests replace the lookup
       through `app.dependency_overrides[find_course_information_service]`.

    find_course_information_service   → service or None (used by /health)
    get_course_information_service    → service, or CatalogDataError (→ 500)
"""

from typing import Optional

from fastapi import Depends, Request

from course_information.exceptions import CatalogDataError
from course_information.services.catalog_base import CourseInformationService


def find_course_information_service(request: Request) -> Optional[CourseInformationService]:
    return getattr(request.app.state, "course_information_service", None)


def get_course_information_service(
    service: Optional[CourseInformationService] = Depends(find_course_information_service),
) -> CourseInformationService:
    if service is None:
        raise CatalogDataError(message="Course catalog service is not configured")
    return service
