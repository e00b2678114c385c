"""
Course Information Service — Abstract Catalog Service Interface
=================================================================

What:  The contract every catalog backend implements.
How:   Concrete implementations inherit from CourseInformationService and
       implement each lookup. Routes receive an instance through FastAPI
       dependency injection (see course_information.dependencies).
Who:   Called by course_information.routes.course_information, one method per
       endpoint.

Return conventions:
    - "Nothing matched" is None (single record) or an empty list, never an
      exception. Routes turn both into 404.
    - Parameters arrive already validated and stripped; optional ones are None
      when absent.
    - Backend failures may raise CourseInformationError subclasses; anything
      else is wrapped by the route into CatalogServiceError.

Implementations:
    - JsonCatalogService: reads an extracted catalog snapshot from disk
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from course_information.schemas.catalog import Building, Course, CourseSection


class CourseInformationService(ABC):
    """Abstract interface for course catalog lookups."""

    @abstractmethod
    async def get_course_sections_by_professor(self, professor: str) -> List[CourseSection]:
        """Sections taught by the given professor."""
        ...

    @abstractmethod
    async def get_courses_by_major(self, major: str) -> Optional[List[Course]]:
        """Courses offered under a major / subject code (e.g. 'CSCI')."""
        ...

    @abstractmethod
    async def get_section_details_by_crn(self, crn: str) -> Optional[CourseSection]:
        """The section identified by a CRN, or None."""
        ...

    @abstractmethod
    async def get_course_by_athena_name(self, athena_name: str) -> Optional[List[Course]]:
        """Courses whose Athena short title matches."""
        ...

    @abstractmethod
    async def get_all_buildings(self) -> List[Building]:
        ...

    @abstractmethod
    async def fetch_special_course_types(self, crn: str) -> List[str]:
        """
        Special types of a section: any of 'honors', 'lab', 'online'.

        Returns an empty list when the CRN is unknown or the section is a
        regular one.
        """
        ...

    @abstractmethod
    async def get_all_subjects(self) -> List[str]:
        ...

    @abstractmethod
    async def get_courses_by_term(self, term: str) -> List[Course]:
        """Courses offered in a term such as 'Fall 2024'."""
        ...

    @abstractmethod
    async def get_course_by_id(self, course_id: str) -> Optional[Course]:
        """The course with the given id (e.g. 'CSCI-1301'), or None."""
        ...

    @abstractmethod
    async def get_courses(
        self,
        credit_hours: int,
        major_code: Optional[str] = None,
        class_level: Optional[int] = None,
    ) -> List[Course]:
        """
        Courses worth `credit_hours`, optionally narrowed by major code and
        class level (e.g. 4000 for 4000-level courses).
        """
        ...

    @abstractmethod
    async def get_coreq_courses(
        self,
        course_id: Optional[str] = None,
        crn: Optional[str] = None,
    ) -> List[Course]:
        """Co-requisites of the course given by id or by one of its CRNs."""
        ...

    @abstractmethod
    async def get_prereq_courses(
        self,
        course_id: Optional[str] = None,
        crn: Optional[str] = None,
    ) -> List[Course]:
        """Pre-requisites of the course given by id or by one of its CRNs."""
        ...

    @abstractmethod
    async def get_course_sections(
        self,
        time_slot: Optional[str] = None,
        crn: Optional[str] = None,
    ) -> List[CourseSection]:
        """Sections meeting in a time slot ('10:00 AM - 11:15 AM'), optionally by CRN."""
        ...

    @abstractmethod
    async def get_courses_by_requirement(self, requirement: str) -> List[Course]:
        """Courses that fulfil the named requirement."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """
        Check if the backend can answer lookups.

        Who:     Called by the health check endpoint.
        Returns: True if lookups can be served, False otherwise.
        """
        ...
