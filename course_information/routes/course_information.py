"""
Course Information Service — Course Information Route Handlers
================================================================

What:  GET endpoints under /api/courseInformation for catalog lookups.
How:   Every handler follows the same contract:
           1. validate its query parameters   (InvalidParameterError → 400)
           2. call exactly one service method  (foreign error → CatalogServiceError → 500)
           3. None / empty result              (NotFoundError → 404)
           4. otherwise return the payload     (200)
       Status codes are produced by the global exception handlers in main.py.
Who:   Called by the schedule builder frontend and other campus services.

Endpoint Inventory:
    GET /professor                   sections taught by a professor
    GET /coursesByMajor              courses in a major
    GET /section-by-crn              one section by CRN
    GET /course-by-athena-name       courses by Athena short title
    GET /buildings                   all buildings (never 404)
    GET /course/specialCourseTypes   honors / lab / online flags of a CRN
    GET /subjects                    all subject codes (never 404)
    GET /term                        courses offered in a term
    GET /getCourseById               one course by id
    GET /courses                     courses by credit hours (+ major, level)
    GET /course/coreqs               co-requisites by course id or CRN
    GET /course/prereqs              pre-requisites by course id or CRN
    GET /course/sections             sections by time slot (+ CRN)
    GET /requirement                 courses fulfilling a requirement
"""

import logging
from typing import Any, Awaitable, Callable, List, Optional, TypeVar

from fastapi import APIRouter, Depends, Query

from course_information.dependencies import get_course_information_service
from course_information.exceptions import (
    CatalogServiceError,
    CourseInformationError,
    NotFoundError,
)
from course_information.schemas.catalog import Building, Course, CourseSection
from course_information.schemas.responses import ErrorResponse
from course_information.services.catalog_base import CourseInformationService
from course_information.validation import (
    clean_optional,
    parse_time_slot,
    require_any_param,
    require_param,
    validate_credit_hours,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

router = APIRouter(prefix="/api/courseInformation", tags=["course-information"])

# ── Shared OpenAPI response declarations ──────────────────────────────────
_LOOKUP_RESPONSES = {
    400: {"description": "Missing or invalid query parameter", "model": ErrorResponse},
    404: {"description": "No matching data", "model": ErrorResponse},
    500: {"description": "Internal server error", "model": ErrorResponse},
}
_LISTING_RESPONSES = {
    500: {"description": "Internal server error", "model": ErrorResponse},
}


async def _lookup(method: Callable[..., Awaitable[T]], *args: Any, **kwargs: Any) -> T:
    """
    Invoke one service method, translating foreign exceptions.

    CourseInformationError subclasses propagate untouched (they already map to
    a status code). Anything else is logged with its traceback and re-raised
    as CatalogServiceError so the client gets a generic 500.
    """
    try:
        return await method(*args, **kwargs)
    except CourseInformationError:
        raise
    except Exception as e:
        operation = getattr(method, "__name__", repr(method))
        logger.error("Catalog lookup %s failed: %s", operation, e, exc_info=True)
        raise CatalogServiceError(
            context={"operation": operation, "error_type": type(e).__name__},
        ) from e


def _found(result: Optional[T], resource: str, **lookup: Any) -> T:
    """Return result unless it is None or empty, in which case raise NotFoundError."""
    if result is None or (isinstance(result, list) and not result):
        raise NotFoundError(
            resource=resource,
            lookup={k: v for k, v in lookup.items() if v is not None},
        )
    return result


# ══════════════════════════════════════════════════════════════════════════
# Section lookups
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "/professor",
    response_model=List[CourseSection],
    responses=_LOOKUP_RESPONSES,
    summary="Get course sections by professor",
    description="Retrieves the course sections taught by the given professor.",
)
async def get_course_by_professor(
    professor: Optional[str] = Query(default=None, description="Name of the professor teaching the course"),
    service: CourseInformationService = Depends(get_course_information_service),
) -> List[CourseSection]:
    professor = require_param("professor", professor)
    sections = await _lookup(service.get_course_sections_by_professor, professor)
    return _found(sections, "course sections", professor=professor)


@router.get(
    "/section-by-crn",
    response_model=CourseSection,
    responses=_LOOKUP_RESPONSES,
    summary="Get section by CRN",
    description="Retrieves a section from the given CRN.",
)
async def get_section_by_crn(
    crn: Optional[str] = Query(default=None, description="Course Reference Number of the section"),
    service: CourseInformationService = Depends(get_course_information_service),
) -> CourseSection:
    crn = require_param("crn", crn)
    section = await _lookup(service.get_section_details_by_crn, crn)
    return _found(section, "section", crn=crn)


@router.get(
    "/course/specialCourseTypes",
    response_model=List[str],
    responses=_LOOKUP_RESPONSES,
    summary="Get special course types by CRN",
    description="Retrieves whether the section is honors, lab or online.",
)
async def get_special_course_types(
    crn: Optional[str] = Query(default=None, description="CRN of the section"),
    service: CourseInformationService = Depends(get_course_information_service),
) -> List[str]:
    crn = require_param("crn", crn)
    types = await _lookup(service.fetch_special_course_types, crn)
    return _found(types, "special course types", crn=crn)


@router.get(
    "/course/sections",
    response_model=List[CourseSection],
    responses=_LOOKUP_RESPONSES,
    summary="Get course sections by time slot",
    description=(
        "Retrieves the sections meeting in a time slot such as '10:00 AM - 11:15 AM'. "
        "A CRN narrows the result to that section; either parameter alone is accepted."
    ),
)
async def get_course_sections(
    time_slot: Optional[str] = Query(
        default=None, alias="timeSlot", description="Time slot range, e.g. '10:00 AM - 11:15 AM'",
    ),
    crn: Optional[str] = Query(default=None, description="CRN to narrow the result (optional)"),
    service: CourseInformationService = Depends(get_course_information_service),
) -> List[CourseSection]:
    time_slot, crn = require_any_param("timeSlot", time_slot, "crn", crn)
    if time_slot is not None:
        parse_time_slot(time_slot)
    sections = await _lookup(service.get_course_sections, time_slot=time_slot, crn=crn)
    return _found(sections, "course sections", timeSlot=time_slot, crn=crn)


# ══════════════════════════════════════════════════════════════════════════
# Course lookups
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "/coursesByMajor",
    response_model=List[Course],
    responses=_LOOKUP_RESPONSES,
    summary="Get courses by major",
    description="Retrieves the courses with the given major identifier (e.g. CSCI).",
)
async def get_courses_by_major(
    major: Optional[str] = Query(default=None, description="Major identifier, e.g. CSCI"),
    service: CourseInformationService = Depends(get_course_information_service),
) -> List[Course]:
    major = require_param("major", major)
    courses = await _lookup(service.get_courses_by_major, major)
    return _found(courses, "courses", major=major)


@router.get(
    "/course-by-athena-name",
    response_model=List[Course],
    responses=_LOOKUP_RESPONSES,
    summary="Get courses by Athena name",
    description="Retrieves the courses listed under the given Athena name.",
)
async def get_course_by_athena_name(
    athena_name: Optional[str] = Query(
        default=None, alias="athenaName", description="Athena short title of the course",
    ),
    service: CourseInformationService = Depends(get_course_information_service),
) -> List[Course]:
    athena_name = require_param("athenaName", athena_name)
    courses = await _lookup(service.get_course_by_athena_name, athena_name)
    return _found(courses, "courses", athenaName=athena_name)


@router.get(
    "/term",
    response_model=List[Course],
    responses=_LOOKUP_RESPONSES,
    summary="Get courses by term",
    description="Retrieves the courses offered in the given term, like Fall or Summer.",
)
async def get_courses_by_term(
    term: Optional[str] = Query(default=None, description="Term, e.g. 'Fall 2024'"),
    service: CourseInformationService = Depends(get_course_information_service),
) -> List[Course]:
    term = require_param("term", term)
    courses = await _lookup(service.get_courses_by_term, term)
    return _found(courses, "courses", term=term)


@router.get(
    "/getCourseById",
    response_model=Course,
    responses=_LOOKUP_RESPONSES,
    summary="Get course by course ID",
    description="Retrieves course information for a course ID such as 'CSCI-1301'.",
)
async def get_course_by_id(
    course_id: Optional[str] = Query(default=None, alias="courseId", description="Course ID, e.g. CSCI-1301"),
    service: CourseInformationService = Depends(get_course_information_service),
) -> Course:
    course_id = require_param("courseId", course_id)
    course = await _lookup(service.get_course_by_id, course_id)
    return _found(course, "course", courseId=course_id)


@router.get(
    "/courses",
    response_model=List[Course],
    responses=_LOOKUP_RESPONSES,
    summary="Get courses by credit hours, major and class level",
    description=(
        "Retrieves courses worth the given credit hours (1-4), optionally narrowed "
        "by major code (e.g. 'CSCI') and class level (e.g. 4000)."
    ),
)
async def get_courses(
    credit_hours: Optional[int] = Query(default=None, alias="creditHours", description="Credit hours, 1 to 4"),
    major_code: Optional[str] = Query(default=None, alias="majorCode", description="Major code (optional)"),
    class_level: Optional[int] = Query(default=None, alias="classLevel", description="Class level (optional)"),
    service: CourseInformationService = Depends(get_course_information_service),
) -> List[Course]:
    credit_hours = validate_credit_hours(credit_hours)
    major_code = clean_optional(major_code)
    courses = await _lookup(
        service.get_courses,
        credit_hours,
        major_code=major_code,
        class_level=class_level,
    )
    return _found(
        courses,
        "courses",
        creditHours=credit_hours,
        majorCode=major_code,
        classLevel=class_level,
    )


@router.get(
    "/course/coreqs",
    response_model=List[Course],
    responses=_LOOKUP_RESPONSES,
    summary="Get co-requisites by course ID or CRN",
    description="Retrieves the co-requisite courses of a course given by ID or by one of its CRNs.",
)
async def get_coreqs(
    course_id: Optional[str] = Query(default=None, alias="courseId", description="Course ID (optional)"),
    crn: Optional[str] = Query(default=None, description="CRN (optional)"),
    service: CourseInformationService = Depends(get_course_information_service),
) -> List[Course]:
    course_id, crn = require_any_param("courseId", course_id, "crn", crn)
    courses = await _lookup(service.get_coreq_courses, course_id=course_id, crn=crn)
    return _found(courses, "co-requisites", courseId=course_id, crn=crn)


@router.get(
    "/course/prereqs",
    response_model=List[Course],
    responses=_LOOKUP_RESPONSES,
    summary="Get pre-requisites by course ID or CRN",
    description="Retrieves the pre-requisite courses of a course given by ID or by one of its CRNs.",
)
async def get_prereqs(
    course_id: Optional[str] = Query(default=None, alias="courseId", description="Course ID (optional)"),
    crn: Optional[str] = Query(default=None, description="CRN (optional)"),
    service: CourseInformationService = Depends(get_course_information_service),
) -> List[Course]:
    course_id, crn = require_any_param("courseId", course_id, "crn", crn)
    courses = await _lookup(service.get_prereq_courses, course_id=course_id, crn=crn)
    return _found(courses, "pre-requisites", courseId=course_id, crn=crn)


@router.get(
    "/requirement",
    response_model=List[Course],
    responses=_LOOKUP_RESPONSES,
    summary="Get courses by requirement",
    description="Retrieves the courses that fulfil the given requirement.",
)
async def get_requirement_courses(
    requirement: Optional[str] = Query(default=None, description="Requirement name"),
    service: CourseInformationService = Depends(get_course_information_service),
) -> List[Course]:
    requirement = require_param("requirement", requirement)
    courses = await _lookup(service.get_courses_by_requirement, requirement)
    return _found(courses, "courses", requirement=requirement)


# ══════════════════════════════════════════════════════════════════════════
# Catalog-wide listings (200 even when empty)
# ══════════════════════════════════════════════════════════════════════════

@router.get(
    "/buildings",
    response_model=List[Building],
    responses=_LISTING_RESPONSES,
    summary="Get all buildings",
    description="Retrieves every campus building known to the catalog.",
)
async def get_all_buildings(
    service: CourseInformationService = Depends(get_course_information_service),
) -> List[Building]:
    buildings = await _lookup(service.get_all_buildings)
    return buildings or []


@router.get(
    "/subjects",
    response_model=List[str],
    responses=_LISTING_RESPONSES,
    summary="Get all subjects",
    description="Retrieves every academic subject code in the catalog.",
)
async def get_all_subjects(
    service: CourseInformationService = Depends(get_course_information_service),
) -> List[str]:
    subjects = await _lookup(service.get_all_subjects)
    return subjects or []
