"""
Course Information Service — Custom Exception Hierarchy
=========================================================

What:  Application-specific exceptions for every error outcome of a lookup.
How:   Each exception carries a user-safe message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into JSON
       error responses with the matching HTTP status code.
Who:   Raised by parameter validation, routes and catalog services.

Exception Hierarchy:
    CourseInformationError (base)
    ├── InvalidParameterError    → 400 Bad Request
    ├── NotFoundError            → 404 Not Found
    ├── RateLimitExceededError   → 429 Too Many Requests
    ├── CatalogDataError         → 500 Internal Server Error
    └── CatalogServiceError      → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class CourseInformationError(Exception):
    """
    Base exception for all course information errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged, returned only for 4xx errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class InvalidParameterError(CourseInformationError):
    """
    Raised when a query parameter is missing, empty, malformed or out of bounds.

    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Query parameter 'professor' is required",
            "details": {"parameter": "professor"}
        }
    """

    def __init__(
        self,
        message: str = "Invalid query parameter",
        parameter: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if parameter:
            ctx["parameter"] = parameter
        super().__init__(message=message, context=ctx)
        self.parameter = parameter


class NotFoundError(CourseInformationError):
    """
    Raised when a lookup produced no data.

    HTTP:    404 Not Found

    The catalog service returns None or an empty list for "nothing matched";
    routes convert that into this exception so the service layer stays free
    of HTTP concerns.
    """

    def __init__(
        self,
        resource: str = "resource",
        lookup: Optional[Dict[str, Any]] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"No {resource} found"
        ctx = context or {}
        ctx["resource"] = resource
        if lookup:
            criteria = ", ".join(f"{key}='{value}'" for key, value in lookup.items())
            message = f"No {resource} found for {criteria}"
            ctx["lookup"] = lookup
        super().__init__(message=message, context=ctx)


class RateLimitExceededError(CourseInformationError):
    """
    Raised when a client exceeds the per-IP request rate limit, or by a
    catalog backend that throttles lookups.

    HTTP:    429 Too Many Requests (with Retry-After header)
    """

    def __init__(
        self,
        retry_after: int = 60,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = (
            f"Rate limit exceeded. Please wait {retry_after} seconds before making more requests."
        )
        ctx = context or {}
        ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class CatalogDataError(CourseInformationError):
    """
    Raised when the catalog snapshot cannot be read, parsed or is not loaded.

    HTTP:    500 Internal Server Error

    The file path and parser error go into `context` for the server log;
    the client only sees a generic message.
    """

    def __init__(
        self,
        message: str = "Course catalog data is unavailable",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class CatalogServiceError(CourseInformationError):
    """
    Raised when a catalog service call fails with a foreign exception.

    HTTP:    500 Internal Server Error

    Routes wrap anything that is not a CourseInformationError in this type
    after logging the original traceback.
    """

    def __init__(
        self,
        message: str = "An error occurred while fetching course information.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
