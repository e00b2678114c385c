"""
Course Information Service — FastAPI Application Factory
==========================================================

What:  Creates and configures the FastAPI application instance.
How:   create_app() wires middleware, exception handlers, routes and the
       lifespan that loads the catalog snapshot.
Who:   uvicorn (`uvicorn course_information.main:app`) and the test suite.

Application Architecture:
    ┌───────────────────────────────────────────────────────────┐
    │                        FastAPI App                        │
    │                                                           │
    │  Middleware Chain:                                        │
    │  ┌──────────────┐ ┌──────────┐ ┌─────────┐ ┌───────────┐  │
    │  │    Req ID    │→│ Logging  │→│ RateLim │→│ GZip/CORS │  │
    │  └──────────────┘ └──────────┘ └─────────┘ └───────────┘  │
    │                                                           │
    │  Routes:                                                  │
    │  ┌───────────────────────────────┐ ┌───────────────────┐  │
    │  │ GET /api/courseInformation/*  │ │ GET /health       │  │
    │  └───────────────────────────────┘ └───────────────────┘  │
    │                                                           │
    │  Exception Handlers:                                      │
    │  ┌─────────────────────────────────────────────────────┐  │
    │  │ Param→400 │ NotFound→404 │ RateLimit→429 │ *→500    │  │
    │  └─────────────────────────────────────────────────────┘  │
    └───────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:
    1. Initialize logging
    2. Load the catalog snapshot (errors are logged; /health reports them)
    Shutdown:
    1. Log shutdown complete
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from course_information import __version__
from course_information.config import Settings, settings
from course_information.exceptions import (
    CatalogDataError,
    CatalogServiceError,
    CourseInformationError,
    InvalidParameterError,
    NotFoundError,
    RateLimitExceededError,
)
from course_information.middleware.logging import RequestLoggingMiddleware
from course_information.middleware.rate_limit import RateLimitMiddleware, rate_limit_response
from course_information.middleware.request_id import RequestIDMiddleware, request_id_var
from course_information.routes import course_information, health
from course_information.services.json_catalog import JsonCatalogService

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again or contact support."


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    When:    Called once during app startup, before the catalog is loaded.
    Format:  %(asctime)s [%(levelname)s] %(name)s: %(message)s
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request noise; our access logger covers it
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

async def init_catalog_service(app: FastAPI) -> None:
    """
    Create the snapshot-backed catalog service and store it on app.state.

    A service already placed on app.state (e.g. by an embedding application)
    is left alone. A snapshot that fails to load is logged; the unloaded
    service stays registered so /health can report it.
    """
    if getattr(app.state, "course_information_service", None) is not None:
        return

    app_settings: Settings = app.state.settings
    service = JsonCatalogService(app_settings.catalog_path)
    try:
        await service.load()
    except CatalogDataError as e:
        logger.error("Catalog load failed: %s | Context: %s", e.message, e.context)
        logger.error("Fix CATALOG_PATH or the snapshot file and restart the server.")
    app.state.course_information_service = service


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    app_settings: Settings = app.state.settings

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(app_settings.log_level)
    logger.info("Course Information Service %s starting up...", __version__)

    await init_catalog_service(app)

    logger.info("Server ready at http://%s:%d", app_settings.backend_host, app_settings.backend_port)
    logger.info("API docs: http://%s:%d/docs", app_settings.backend_host, app_settings.backend_port)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    return request_id_var.get("") or getattr(request.state, "request_id", "")


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers for consistent error responses.

    Handler hierarchy:
        InvalidParameterError   → 400 Bad Request
        RequestValidationError  → 400 Bad Request (e.g. creditHours=abc)
        NotFoundError           → 404 Not Found
        RateLimitExceededError  → 429 Too Many Requests
        CatalogDataError        → 500 Internal Server Error
        CatalogServiceError     → 500 Internal Server Error
        CourseInformationError  → 500 Internal Server Error (catch-all for custom)
        Exception (fallback)    → 500 Internal Server Error

    5xx bodies never carry internal details; those are logged server-side.
    """

    @app.exception_handler(InvalidParameterError)
    async def handle_invalid_parameter(request: Request, exc: InvalidParameterError):
        rid = _request_id(request)
        logger.info("[%s] Invalid parameter: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        rid = _request_id(request)
        errors = [
            {"parameter": str(err.get("loc", ["", ""])[-1]), "message": err.get("msg", "")}
            for err in exc.errors()
        ]
        logger.info("[%s] Request validation failed: %s", rid, errors)
        return JSONResponse(
            status_code=400,
            content={
                "error": "validation_error",
                "message": "One or more query parameters are invalid",
                "details": {"errors": errors},
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = _request_id(request)
        return JSONResponse(
            status_code=404,
            content={
                "error": "not_found",
                "message": exc.message,
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(RateLimitExceededError)
    async def handle_rate_limit(request: Request, exc: RateLimitExceededError):
        """Raised by a throttled catalog backend; the middleware builds the same body."""
        rid = _request_id(request)
        logger.warning("[%s] Rate limited: retry after %ds", rid, exc.retry_after)
        return rate_limit_response(exc, rid)

    @app.exception_handler(CatalogDataError)
    async def handle_catalog_data_error(request: Request, exc: CatalogDataError):
        rid = _request_id(request)
        logger.error("[%s] Catalog data error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": "Course catalog data is currently unavailable.",
                "request_id": rid,
            },
        )

    @app.exception_handler(CatalogServiceError)
    async def handle_catalog_service_error(request: Request, exc: CatalogServiceError):
        rid = _request_id(request)
        logger.error("[%s] Catalog service error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": exc.message,
                "request_id": rid,
            },
        )

    @app.exception_handler(CourseInformationError)
    async def handle_course_information_error(request: Request, exc: CourseInformationError):
        rid = _request_id(request)
        logger.error("[%s] Unhandled application error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": "server_error",
                "message": GENERIC_ERROR_MESSAGE,
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        """Catch-all; the stack trace is logged, never returned."""
        rid = _request_id(request)
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "internal_server_error",
                "message": GENERIC_ERROR_MESSAGE,
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to use; defaults to the module-level singleton.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    app_settings = app_settings or settings

    app = FastAPI(
        title="Course Information API",
        description=(
            "Course catalog lookups by professor, major, CRN, Athena name, term, "
            "requirement, building, subject and special course type."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.settings = app_settings

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added executes first: RequestID → Logging → RateLimit → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID", "Retry-After"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=app_settings.rate_limit_requests,
        window_seconds=app_settings.rate_limit_window,
        enabled=app_settings.rate_limit_enabled,
    )
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(course_information.router)
    app.include_router(health.router)

    return app


# uvicorn expects `course_information.main:app` to be importable
app = create_app()
