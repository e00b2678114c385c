"""
Course Information Service — Error and Health Response Schemas
================================================================

What:  Response envelopes that are not catalog records.
Who:   Referenced by route `responses=` declarations (OpenAPI docs) and the
       health endpoint.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "not_found",
            "message": "No course sections found for professor='Smith'",
            "details": {"resource": "course sections"},
            "request_id": "1f0c2a9e"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Health check response showing service and catalog status."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    catalog: str = Field(description="Catalog state: loaded, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
