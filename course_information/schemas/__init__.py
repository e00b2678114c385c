# Schemas package init
"""
Course Information Service — Schemas Package
==============================================

    - catalog.py:    Course, CourseSection, Building, CatalogSnapshot
    - responses.py:  ErrorResponse, HealthResponse
"""
