"""
FastAPI Application Setup

Main entry point for the Face Swap Portal application.

Responsibility:
    - FastAPI app initialization
    - Router registration (pages, submissions, system)
    - Static serving of stored images under /uploads
    - CORS middleware configuration
    - Global exception handlers (JSON or re-rendered form page)
    - Request logging middleware
    - Health check endpoint

Architecture Notes:
    - Part of API Layer (Presentation)
    - Entry point for HTTP server (uvicorn)
    - Centralizes cross-cutting concerns (logging, CORS, error handling)
    - No business logic - pure HTTP orchestration

Contains:
    - create_app() factory function
    - Global exception handlers
    - Request logging middleware
    - Health check endpoint: GET /health

Does NOT contain:
    - Business logic (delegated to Application Layer)
    - Direct storage access (uses Infrastructure Layer via the pipeline)
"""

import logging
import os
import time
from contextlib import asynccontextmanager
from typing import Optional

from dotenv import load_dotenv
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

# Import routers
from src.api.routers import pages_router, submissions_router, system_router

# Import shared schemas and wiring
from src.api.dependencies import build_pipeline, build_templates, wants_html
from src.api.schemas.common import ErrorResponse

from src.application.services import SubmissionPipeline

# Import domain exceptions for global handling
from src.domain.shared.exceptions import (
    DomainException,
    FileSizeExceededError,
    FormSubmissionError,
    InvalidImageError,
    InvalidSubmissionIdError,
    RateLimitExceededError,
    StorageError,
    SubmissionNotFoundError,
    SubmissionValidationError,
    TransformationConfigurationError,
    TransformationConnectionError,
    TransformationError,
    TransformationServiceError,
    UploadRejectedError,
)
from src.infrastructure.persistence.redis.connection import close_connections
from src.shared.utils import utc_now

# Load .env before create_app() builds the components
load_dotenv()

# Configure logger
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"

# Client-facing messages for server-side failures (detail stays in the logs)
TRANSFORMATION_MESSAGES = {
    TransformationServiceError: "Face swap service returned an error",
    TransformationConnectionError: "Face swap service is unavailable",
    TransformationConfigurationError: "Face swap service is not configured",
}
DEFAULT_TRANSFORMATION_MESSAGE = "Face swap processing failed"
STORAGE_ERROR_MESSAGE = "Internal server error during processing"


# ============================================================================
# RESPONSE MODELS
# ============================================================================


class HealthCheckResponse(BaseModel):
    """
    Health check response model.

    Attributes:
        status: "healthy" when the submission store answers, else "degraded"
        timestamp: ISO 8601 UTC time of the check
        uptime: Seconds since the application was created
        environment: Value of APP_ENV (default "development")
        store: "ok" or "unavailable"
    """

    status: str = "healthy"
    timestamp: str
    uptime: float
    environment: str
    store: str = "ok"


# ============================================================================
# MIDDLEWARE
# ============================================================================


async def request_logging_middleware(request: Request, call_next):
    """
    Request logging middleware.

    Logs all incoming requests with method, path, status code, and duration.

    Logging Format:
        INFO: "Incoming request: POST /submit"
        INFO: "Request completed: POST /submit - 200 - 2.014s"
    """
    logger.info(f"Incoming request: {request.method} {request.url.path}")

    start_time = time.time()

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} - "
        f"{response.status_code} - {duration:.3f}s"
    )

    return response


# ============================================================================
# EXCEPTION HANDLERS
# ============================================================================


def _classify(exc: DomainException) -> tuple[int, str, str]:
    """Map a domain exception to (status code, error code, client message)."""
    if isinstance(exc, RateLimitExceededError):
        return status.HTTP_429_TOO_MANY_REQUESTS, "RATE_LIMIT_EXCEEDED", exc.message
    if isinstance(exc, FileSizeExceededError):
        return status.HTTP_400_BAD_REQUEST, "FILE_TOO_LARGE", exc.message
    if isinstance(exc, UploadRejectedError):
        return status.HTTP_400_BAD_REQUEST, "UPLOAD_REJECTED", exc.message
    if isinstance(exc, SubmissionValidationError):
        return status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", exc.message
    if isinstance(exc, InvalidImageError):
        return status.HTTP_400_BAD_REQUEST, "INVALID_IMAGE", exc.message
    if isinstance(exc, InvalidSubmissionIdError):
        return status.HTTP_400_BAD_REQUEST, "INVALID_ID", exc.message
    if isinstance(exc, SubmissionNotFoundError):
        return status.HTTP_404_NOT_FOUND, "NOT_FOUND", exc.message
    if isinstance(exc, TransformationError):
        message = TRANSFORMATION_MESSAGES.get(type(exc), DEFAULT_TRANSFORMATION_MESSAGE)
        return status.HTTP_500_INTERNAL_SERVER_ERROR, "TRANSFORMATION_FAILED", message
    if isinstance(exc, StorageError):
        return status.HTTP_500_INTERNAL_SERVER_ERROR, "STORAGE_ERROR", STORAGE_ERROR_MESSAGE

    # All other domain exceptions -> 400 Bad Request
    error_code = exc.__class__.__name__.replace("Error", "").upper()
    return status.HTTP_400_BAD_REQUEST, error_code, exc.message


async def domain_exception_handler(request: Request, exc: DomainException):
    """
    Global exception handler for domain layer exceptions.

    Catches all DomainException subclasses and converts them to
    appropriate HTTP error responses with consistent ErrorResponse format.

    Mapping:
        - RateLimitExceededError -> 429 Too Many Requests (+ Retry-After)
        - FileSizeExceededError, UploadRejectedError -> 400 Bad Request
        - SubmissionValidationError, InvalidImageError -> 400 Bad Request
        - InvalidSubmissionIdError -> 400 Bad Request
        - SubmissionNotFoundError -> 404 Not Found
        - TransformationError (+ subclasses), StorageError -> 500 with generic message
        - Other DomainException -> 400 Bad Request

    Form submission errors carry details.errors and details.formData. A browser
    form post (Accept: text/html) gets the form page re-rendered with the same
    status instead of JSON.

    Examples:
        >>> raise SubmissionValidationError(["Name is required"], form_data={...})
        >>> # Returns: 400 {"success": false, "code": "VALIDATION_ERROR",
        >>> #               "message": "Name is required",
        >>> #               "details": {"errors": ["Name is required"], "formData": {...}}}
    """
    status_code, error_code, message = _classify(exc)

    details: dict = {"exception_type": exc.__class__.__name__}
    headers: Optional[dict] = None

    if isinstance(exc, FormSubmissionError):
        errors = exc.errors if isinstance(exc, SubmissionValidationError) else [message]
        details.update({"errors": errors, "formData": exc.form_data})
    if isinstance(exc, FileSizeExceededError):
        details.update({"fileSize": exc.file_size, "maxSize": exc.max_size})
    if isinstance(exc, RateLimitExceededError):
        details["retryAfter"] = exc.retry_after
        headers = {"Retry-After": str(exc.retry_after)}
    if isinstance(exc, SubmissionNotFoundError):
        details["submissionId"] = exc.submission_id

    if status_code >= 500:
        logger.error(
            f"Server-side failure: {exc.__class__.__name__} - {exc.message} - "
            f"Request: {request.method} {request.url.path}"
        )
    else:
        logger.warning(
            f"Domain exception: {exc.__class__.__name__} - {exc.message} - "
            f"Request: {request.method} {request.url.path}"
        )

    if isinstance(exc, FormSubmissionError) and wants_html(request):
        return request.app.state.templates.TemplateResponse(
            request,
            "form.html",
            {
                "title": "Face Swap Form",
                "errors": details["errors"],
                "form_data": exc.form_data,
            },
            status_code=status_code,
            headers=headers,
        )

    error_response = ErrorResponse(code=error_code, message=message, details=details)

    return JSONResponse(
        status_code=status_code,
        content=error_response.model_dump(),
        headers=headers,
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler for unexpected exceptions.

    Catches all unhandled exceptions and converts to 500 Internal Server Error.
    Logs full stack trace for debugging; the client only sees a generic message.
    """
    error_response = ErrorResponse(
        code="INTERNAL_SERVER_ERROR",
        message="An unexpected error occurred",
        details={"type": exc.__class__.__name__},
    )

    # Log with full traceback
    logger.error(
        f"Unexpected error: {exc.__class__.__name__} - {str(exc)} - "
        f"Request: {request.method} {request.url.path}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(),
    )


# ============================================================================
# APP FACTORY
# ============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release the Redis pool on shutdown."""
    yield
    close_connections()


def create_app(pipeline: Optional[SubmissionPipeline] = None) -> FastAPI:
    """
    FastAPI application factory.

    Creates and configures FastAPI app with all middleware, routers,
    static files and exception handlers.

    Configuration:
        - CORS: Allow all origins
        - Routers: /, /submit, /submissions, /api/submissions/lookup, /api/stats, /api/docs
        - Static: /uploads -> storage base directory
        - Health: GET /health

    Args:
        pipeline: Pre-built pipeline (tests inject in-memory store + temp storage);
            built from environment configuration when omitted

    Returns:
        Configured FastAPI application instance

    Usage:
        >>> app = create_app()
        >>> # uvicorn src.api.main:app --reload
    """
    app = FastAPI(
        title="Face Swap Portal API",
        version=APP_VERSION,
        description=(
            "Submit personal details and a photo, get a face-swapped image back. "
            "Browse, download and delete stored submissions."
        ),
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    app.state.pipeline = pipeline or build_pipeline()
    app.state.templates = build_templates()
    app.state.started_at = time.time()

    # Add CORS middleware (allow all origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add request logging middleware
    app.middleware("http")(request_logging_middleware)

    # Register global exception handlers
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    # Register routers
    app.include_router(pages_router)
    app.include_router(submissions_router)
    app.include_router(system_router)

    # Stored images (original/ and swapped/)
    app.mount(
        "/uploads",
        StaticFiles(directory=str(app.state.pipeline.storage.base_dir)),
        name="uploads",
    )

    # Health check endpoint
    @app.get(
        "/health",
        response_model=HealthCheckResponse,
        status_code=status.HTTP_200_OK,
        summary="Health check endpoint",
        description="Health check for monitoring and load balancers",
        tags=["health"],
    )
    async def health_check(request: Request) -> HealthCheckResponse:
        """
        Health check endpoint.

        Examples:
            >>> curl http://localhost:8000/health
            {
              "status": "healthy",
              "timestamp": "2025-01-12T10:00:00+00:00",
              "uptime": 3600.5,
              "environment": "development",
              "store": "ok"
            }
        """
        store_ok = await request.app.state.pipeline.health_check()
        return HealthCheckResponse(
            status="healthy" if store_ok else "degraded",
            timestamp=utc_now().isoformat(),
            uptime=round(time.time() - request.app.state.started_at, 3),
            environment=os.getenv("APP_ENV", "development"),
            store="ok" if store_ok else "unavailable",
        )

    logger.info("FastAPI application created successfully")
    logger.info("Registered routes: /, /submit, /submissions, /api/stats, /api/docs")
    logger.info("Health check available at: GET /health")

    return app


# ============================================================================
# APP INSTANCE (for uvicorn)
# ============================================================================

# Usage: uvicorn src.api.main:app --reload
app = create_app()
