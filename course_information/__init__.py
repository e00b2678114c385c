"""
Course Information Service — Package Initializer
==================================================

What: Marks `course_information` as a Python package and carries the version.
Who:  Imported by uvicorn (`course_information.main:app`), pytest and the health route.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← parameter checks, status codes
    ├─────────────────────────────────────┤
    │   CourseInformationService (ABC)    │  ← injected lookup contract
    ├─────────────────────────────────────┤
    │   JsonCatalogService (default impl) │  ← reads an extracted catalog snapshot
    ├─────────────────────────────────────┤
    │        Schemas (Course, ...)        │  ← read-only records
    └─────────────────────────────────────┘

    Routes never reach past the service interface. Swapping the snapshot-backed
    service for a database-backed one only touches the startup wiring in main.py.
"""

__version__ = "1.0.0"
