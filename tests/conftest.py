"""
Course Information Service — Test Configuration (conftest.py)
===============================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Overview:
    ├── sample_snapshot: CatalogSnapshot parsed from the packaged sample catalog
    ├── sample_course / sample_section / sample_building: single records
    ├── mock_catalog_service: AsyncMock bound to CourseInformationService
    └── test_client: HTTPX AsyncClient talking to a fresh app that uses the mock
"""

import os

# Must be set before course_information.config builds its settings singleton
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from course_information.config import DEFAULT_CATALOG_PATH, Settings
from course_information.dependencies import find_course_information_service
from course_information.main import create_app
from course_information.schemas.catalog import (
    Building,
    CatalogSnapshot,
    Course,
    CourseSection,
)
from course_information.services.catalog_base import CourseInformationService


@pytest.fixture
def sample_snapshot() -> CatalogSnapshot:
    """The catalog snapshot shipped with the package (7 courses, 6 sections, 2 buildings)."""
    return CatalogSnapshot.model_validate_json(Path(DEFAULT_CATALOG_PATH).read_text(encoding="utf-8"))


@pytest.fixture
def sample_course() -> Course:
    return Course(
        course_id="CSCI-1302",
        subject="CSCI",
        course_number="1302",
        title="Software Development",
        athena_name="SOFTWARE DEVELOPMENT",
        credit_hours=4,
        semesters=["Fall 2024"],
        prerequisites=["CSCI-1301"],
    )


@pytest.fixture
def sample_section() -> CourseSection:
    return CourseSection(
        crn="10001",
        course_id="CSCI-1301",
        term="Fall 2024",
        instructor="Barnes, Michael",
        credit_hours=4,
        days="M W F",
        start_time="10:20 AM",
        end_time="11:10 AM",
        building_number="1023",
        room="306",
    )


@pytest.fixture
def sample_building() -> Building:
    return Building(building_number="1023", name="Boyd Research and Education Center")


@pytest.fixture
def mock_catalog_service():
    """
    A catalog service double.

    Every abstract lookup on CourseInformationService is an AsyncMock child;
    tests set `return_value` / `side_effect` on the method they exercise.
    """
    return AsyncMock(spec=CourseInformationService)


@pytest.fixture
def test_settings() -> Settings:
    return Settings(rate_limit_enabled=False, log_level="WARNING")


@pytest_asyncio.fixture
async def test_client(mock_catalog_service, test_settings):
    """
    HTTPX AsyncClient routed straight into a fresh app instance.

    The app's catalog dependency is overridden with `mock_catalog_service`,
    so no snapshot is read.
    """
    app = create_app(test_settings)
    app.dependency_overrides[find_course_information_service] = lambda: mock_catalog_service
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
