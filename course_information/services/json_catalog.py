"""
Course Information Service — JSON Snapshot Catalog Service
============================================================

What:  Default CourseInformationService backed by an extracted catalog snapshot.
How:   load() reads the JSON document asynchronously (aiofiles), validates it
       into a CatalogSnapshot and builds lookup indexes. Every lookup after that
       is an in-memory scan or dict hit over immutable records.
Who:   Created and loaded once in the application lifespan (main.py).
When:  Snapshot is produced upstream by the bulletin/PDF extraction pipeline;
       this service only reads it.

Matching Rules:
    professor         case-insensitive substring of section.instructor
    major / subject   case-insensitive equality on course.subject
    athena name       case-insensitive equality on course.athena_name
    term              course.semesters or any of its sections' term
    course id         'CSCI-1301' == 'csci 1301' == 'CSCI1301'
    class level       thousand-band of the course number (4000 → 4000..4999)
    time slot         section start/end equal to the parsed slot
"""

import logging
import re
from collections import defaultdict
from typing import Dict, List, Optional

import aiofiles
from pydantic import ValidationError as PydanticValidationError

from course_information.exceptions import CatalogDataError
from course_information.schemas.catalog import (
    Building,
    CatalogSnapshot,
    Course,
    CourseSection,
)
from course_information.services.catalog_base import CourseInformationService
from course_information.validation import parse_clock_time, parse_time_slot

logger = logging.getLogger(__name__)

_COURSE_ID_SEPARATORS = re.compile(r"[\s\-_]+")
_LEADING_DIGITS = re.compile(r"^(\d+)")

SPECIAL_COURSE_TYPES = ("honors", "lab", "online")


def normalize_course_id(course_id: str) -> str:
    """Canonical key for a course id: upper case, separators removed."""
    return _COURSE_ID_SEPARATORS.sub("", course_id).upper()


def class_level_of(course_number: str) -> Optional[int]:
    """4010 → 4000, '1301L' → 1000. None when the number has no digits."""
    match = _LEADING_DIGITS.match(course_number)
    if not match:
        return None
    number = int(match.group(1))
    return (number // 1000) * 1000


class JsonCatalogService(CourseInformationService):
    """
    Catalog lookups over a snapshot loaded from `catalog_path`.

    Lifecycle:
        1. JsonCatalogService(path)   → not loaded, lookups raise CatalogDataError
        2. await load()               → snapshot parsed, indexes built
        3. lookups                    → read-only; safe for concurrent requests

    A snapshot can also be handed in directly (tests, alternative loaders)
    with `from_snapshot()`.
    """

    def __init__(self, catalog_path: str):
        self.catalog_path = catalog_path
        self._snapshot: Optional[CatalogSnapshot] = None
        self._courses_by_id: Dict[str, Course] = {}
        self._sections_by_crn: Dict[str, CourseSection] = {}
        self._sections_by_course: Dict[str, List[CourseSection]] = defaultdict(list)

    @classmethod
    def from_snapshot(cls, snapshot: CatalogSnapshot, catalog_path: str = "<memory>") -> "JsonCatalogService":
        service = cls(catalog_path)
        service._index(snapshot)
        return service

    @property
    def is_loaded(self) -> bool:
        return self._snapshot is not None

    # ══════════════════════════════════════════════════════════════════════
    # Loading
    # ══════════════════════════════════════════════════════════════════════

    async def load(self) -> None:
        """
        Read and validate the snapshot file, then build indexes.

        Raises:
            CatalogDataError: file missing/unreadable or not a valid snapshot.
                The previous snapshot (if any) stays in place on failure.
        """
        try:
            async with aiofiles.open(self.catalog_path, mode="r", encoding="utf-8") as f:
                raw = await f.read()
        except OSError as e:
            raise CatalogDataError(
                message="Could not read the course catalog snapshot",
                context={"path": self.catalog_path, "os_error": str(e)},
            ) from e
        except UnicodeDecodeError as e:
            raise CatalogDataError(
                message="Course catalog snapshot is malformed",
                context={"path": self.catalog_path, "decode_error": str(e)},
            ) from e

        try:
            snapshot = CatalogSnapshot.model_validate_json(raw)
        except PydanticValidationError as e:
            raise CatalogDataError(
                message="Course catalog snapshot is malformed",
                context={"path": self.catalog_path, "errors": e.error_count()},
            ) from e

        self._index(snapshot)
        logger.info(
            "Loaded catalog snapshot %s: %d courses, %d sections, %d buildings",
            self.catalog_path,
            len(snapshot.courses),
            len(snapshot.sections),
            len(snapshot.buildings),
        )

    def _index(self, snapshot: CatalogSnapshot) -> None:
        courses_by_id = {normalize_course_id(c.course_id): c for c in snapshot.courses}
        sections_by_crn = {s.crn: s for s in snapshot.sections}
        sections_by_course: Dict[str, List[CourseSection]] = defaultdict(list)
        for section in snapshot.sections:
            sections_by_course[normalize_course_id(section.course_id)].append(section)

        self._courses_by_id = courses_by_id
        self._sections_by_crn = sections_by_crn
        self._sections_by_course = sections_by_course
        self._snapshot = snapshot

    def _require_snapshot(self) -> CatalogSnapshot:
        if self._snapshot is None:
            raise CatalogDataError(
                message="Course catalog is not loaded",
                context={"path": self.catalog_path},
            )
        return self._snapshot

    # ══════════════════════════════════════════════════════════════════════
    # Section lookups
    # ══════════════════════════════════════════════════════════════════════

    async def get_course_sections_by_professor(self, professor: str) -> List[CourseSection]:
        snapshot = self._require_snapshot()
        needle = professor.casefold()
        return [s for s in snapshot.sections if needle in s.instructor.casefold()]

    async def get_section_details_by_crn(self, crn: str) -> Optional[CourseSection]:
        self._require_snapshot()
        return self._sections_by_crn.get(crn)

    async def fetch_special_course_types(self, crn: str) -> List[str]:
        self._require_snapshot()
        section = self._sections_by_crn.get(crn)
        if section is None:
            return []
        return [kind for kind in SPECIAL_COURSE_TYPES if getattr(section, kind)]

    async def get_course_sections(
        self,
        time_slot: Optional[str] = None,
        crn: Optional[str] = None,
    ) -> List[CourseSection]:
        snapshot = self._require_snapshot()
        if time_slot is None:
            section = self._sections_by_crn.get(crn) if crn else None
            return [section] if section else []

        start, end = parse_time_slot(time_slot)
        matches = []
        for section in snapshot.sections:
            if crn is not None and section.crn != crn:
                continue
            if not section.start_time or not section.end_time:
                continue
            try:
                section_start = parse_clock_time(section.start_time)
                section_end = parse_clock_time(section.end_time)
            except ValueError:
                logger.warning("Section %s has unparseable meeting time", section.crn)
                continue
            if section_start == start and section_end == end:
                matches.append(section)
        return matches

    # ══════════════════════════════════════════════════════════════════════
    # Course lookups
    # ══════════════════════════════════════════════════════════════════════

    async def get_courses_by_major(self, major: str) -> Optional[List[Course]]:
        snapshot = self._require_snapshot()
        code = major.casefold()
        return [c for c in snapshot.courses if c.subject.casefold() == code]

    async def get_course_by_athena_name(self, athena_name: str) -> Optional[List[Course]]:
        snapshot = self._require_snapshot()
        name = athena_name.casefold()
        return [c for c in snapshot.courses if c.athena_name.casefold() == name]

    async def get_courses_by_term(self, term: str) -> List[Course]:
        snapshot = self._require_snapshot()
        wanted = term.casefold()
        results = []
        for course in snapshot.courses:
            offered = any(s.casefold() == wanted for s in course.semesters)
            if not offered:
                sections = self._sections_by_course.get(normalize_course_id(course.course_id), [])
                offered = any(s.term.casefold() == wanted for s in sections)
            if offered:
                results.append(course)
        return results

    async def get_course_by_id(self, course_id: str) -> Optional[Course]:
        self._require_snapshot()
        return self._courses_by_id.get(normalize_course_id(course_id))

    async def get_courses(
        self,
        credit_hours: int,
        major_code: Optional[str] = None,
        class_level: Optional[int] = None,
    ) -> List[Course]:
        snapshot = self._require_snapshot()
        wanted_level = (class_level // 1000) * 1000 if class_level is not None else None
        results = []
        for course in snapshot.courses:
            if course.credit_hours != credit_hours:
                continue
            if major_code is not None and course.subject.casefold() != major_code.casefold():
                continue
            if wanted_level is not None and class_level_of(course.course_number) != wanted_level:
                continue
            results.append(course)
        return results

    async def get_coreq_courses(
        self,
        course_id: Optional[str] = None,
        crn: Optional[str] = None,
    ) -> List[Course]:
        course = self._resolve_course(course_id, crn)
        if course is None:
            return []
        return self._existing_courses(course.corequisites)

    async def get_prereq_courses(
        self,
        course_id: Optional[str] = None,
        crn: Optional[str] = None,
    ) -> List[Course]:
        course = self._resolve_course(course_id, crn)
        if course is None:
            return []
        return self._existing_courses(course.prerequisites)

    async def get_courses_by_requirement(self, requirement: str) -> List[Course]:
        snapshot = self._require_snapshot()
        wanted = requirement.casefold()
        return [
            c for c in snapshot.courses
            if any(r.casefold() == wanted for r in c.requirements)
        ]

    # ══════════════════════════════════════════════════════════════════════
    # Catalog-wide listings
    # ══════════════════════════════════════════════════════════════════════

    async def get_all_buildings(self) -> List[Building]:
        return list(self._require_snapshot().buildings)

    async def get_all_subjects(self) -> List[str]:
        snapshot = self._require_snapshot()
        return sorted({c.subject.upper() for c in snapshot.courses})

    async def health_check(self) -> bool:
        return self.is_loaded

    # ── Helpers ───────────────────────────────────────────────────────────

    def _resolve_course(self, course_id: Optional[str], crn: Optional[str]) -> Optional[Course]:
        """Course id wins over CRN when both are given."""
        self._require_snapshot()
        if course_id:
            return self._courses_by_id.get(normalize_course_id(course_id))
        if crn:
            section = self._sections_by_crn.get(crn)
            if section is not None:
                return self._courses_by_id.get(normalize_course_id(section.course_id))
        return None

    def _existing_courses(self, course_ids: List[str]) -> List[Course]:
        courses = []
        for course_id in course_ids:
            course = self._courses_by_id.get(normalize_course_id(course_id))
            if course is None:
                logger.debug("Requisite %s is not in the catalog", course_id)
                continue
            courses.append(course)
        return courses
