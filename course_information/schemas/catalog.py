"""
Course Information Service — Catalog Record Schemas
=====================================================

What:  Pydantic models for the read-only records the API returns.
How:   Fields are snake_case in Python and camelCase on the wire
       (`course_id` ↔ `courseId`). Both spellings are accepted on input so
       snapshots written by other tools load unchanged.
Who:   Built by catalog services, serialized by FastAPI route handlers.

The HTTP layer never creates or mutates these records; it forwards what the
service returns.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CatalogRecord(BaseModel):
    """Shared configuration: camelCase aliases, immutable instances."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Building(CatalogRecord):
    """A campus building sections can meet in."""

    building_number: str = Field(description="Campus building number (e.g. '1023')")
    name: str = Field(description="Building name")
    latitude: Optional[float] = Field(default=None, description="WGS84 latitude")
    longitude: Optional[float] = Field(default=None, description="WGS84 longitude")


class Course(CatalogRecord):
    """
    A catalog course, independent of any particular offering.

    Prerequisite and corequisite lists hold course ids, not nested courses;
    the co-/pre-requisite endpoints resolve them to full Course records.
    """

    course_id: str = Field(description="Subject and number, e.g. 'CSCI-1301'")
    subject: str = Field(description="Subject / major code, e.g. 'CSCI'")
    course_number: str = Field(description="Course number, e.g. '1301' or '1301L'")
    title: str = Field(description="Full bulletin title")
    athena_name: str = Field(description="Short title shown in Athena")
    description: str = Field(default="", description="Bulletin description")
    department: Optional[str] = Field(default=None, description="Owning department")
    credit_hours: int = Field(ge=0, description="Credit hours awarded")
    semesters: List[str] = Field(default_factory=list, description="Terms the course is offered")
    prerequisites: List[str] = Field(default_factory=list, description="Prerequisite course ids")
    corequisites: List[str] = Field(default_factory=list, description="Corequisite course ids")
    requirements: List[str] = Field(
        default_factory=list,
        description="Requirement names this course fulfils",
    )


class CourseSection(CatalogRecord):
    """A scheduled offering of a course, identified by its CRN."""

    crn: str = Field(description="Course Reference Number")
    course_id: str = Field(description="Course this section belongs to")
    term: str = Field(description="Term of the offering, e.g. 'Fall 2024'")
    instructor: str = Field(default="TBA", description="Instructor display name")
    credit_hours: int = Field(ge=0, description="Credit hours for this section")
    days: str = Field(default="", description="Meeting days, e.g. 'M W F'")
    start_time: Optional[str] = Field(default=None, description="Start time, e.g. '10:00 AM'")
    end_time: Optional[str] = Field(default=None, description="End time, e.g. '11:15 AM'")
    building_number: Optional[str] = Field(default=None, description="Meeting building number")
    room: Optional[str] = Field(default=None, description="Meeting room")
    campus: Optional[str] = Field(default=None, description="Campus name")
    honors: bool = Field(default=False, description="Honors section")
    lab: bool = Field(default=False, description="Lab section")
    online: bool = Field(default=False, description="Online section")
    seats_available: Optional[int] = Field(default=None, ge=0)
    class_size: Optional[int] = Field(default=None, ge=0)


class CatalogSnapshot(CatalogRecord):
    """
    On-disk document holding an extracted catalog.

    Produced by the upstream extraction pipeline; read by JsonCatalogService.
    """

    courses: List[Course] = Field(default_factory=list)
    sections: List[CourseSection] = Field(default_factory=list)
    buildings: List[Building] = Field(default_factory=list)
