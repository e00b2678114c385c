"""
Course Information Service — Application Configuration
========================================================

What:  Centralized configuration loaded from environment variables (or .env).
How:   pydantic-settings reads, coerces and validates every field once at import
       time and exposes a module-level `settings` singleton.
Who:   Imported by main.py, the middleware package and the catalog wiring.
"""

from pathlib import Path
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Snapshot shipped with the package so the API answers out of the box
DEFAULT_CATALOG_PATH = str(Path(__file__).parent / "data" / "sample_catalog.json")


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development. Deployments
    point CATALOG_PATH at the snapshot produced by the extraction pipeline.
    """

    # ── Catalog ───────────────────────────────────────────────────────────
    # What: Path to the JSON catalog snapshot (courses, sections, buildings)
    # Format: see course_information.schemas.catalog.CatalogSnapshot
    catalog_path: str = Field(
        default=DEFAULT_CATALOG_PATH,
        description="Path to the extracted course catalog snapshot (JSON)",
    )

    # ── CORS ──────────────────────────────────────────────────────────────
    # Format: Comma-separated URLs
    cors_origins: str = Field(default="http://localhost:3000")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=8000, ge=1024, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Rate Limiting ─────────────────────────────────────────────────────
    # What: Per-IP sliding window rate limit
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_requests: int = Field(default=600, ge=10, le=100000)
    rate_limit_window: int = Field(default=60, ge=1, le=86400)  # seconds

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # CATALOG_PATH and catalog_path both work
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()
