"""
API Dependencies

Responsibility:
    Wiring between the HTTP layer and the Application Layer.
    Builds the SubmissionPipeline from environment configuration and hands it
    to routers through FastAPI dependency injection.

Architecture Notes:
    - Part of API Layer
    - The pipeline lives on app.state (built once per application)
    - Routers depend on get_pipeline() / get_templates(), never on concrete classes
    - read_submission_form() turns a multipart request into plain fields + IncomingFile

Configuration (environment):
    SUBMISSION_STORE: "redis" (default) or "memory"
    UPLOAD_DIR, MAX_IMAGE_SIZE_BYTES: see ImageStorageService
    FACE_SWAP_*: see HttpFaceSwapClient / SimulatedFaceSwapClient
    RATE_LIMIT_*: see FixedWindowRateLimiter
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from fastapi import Request
from fastapi.templating import Jinja2Templates
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.application.models import IncomingFile
from src.application.services import FixedWindowRateLimiter, SubmissionPipeline
from src.domain.shared.exceptions import UploadRejectedError
from src.domain.submission.constants import (
    MAX_FORM_FIELDS,
    MAX_IMAGE_SIZE_BYTES,
    MAX_UPLOAD_FILES,
)
from src.domain.submission.repositories import SubmissionRepositoryProtocol
from src.infrastructure.face_swap import build_face_swap_client
from src.infrastructure.file_storage import ImageStorageService
from src.infrastructure.persistence.repositories import (
    InMemorySubmissionRepository,
    RedisSubmissionRepository,
)

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).parent / "templates"


# ============================================================================
# PIPELINE WIRING
# ============================================================================


def build_repository(store: Optional[str] = None) -> SubmissionRepositoryProtocol:
    """
    Select the submission store.

    Args:
        store: "redis" or "memory" (default from env: SUBMISSION_STORE or "redis")

    Returns:
        Repository instance (Redis connects lazily on first command)

    Raises:
        ValueError: If the store name is unknown
    """
    store_name = (store or os.getenv("SUBMISSION_STORE", "redis")).strip().lower()

    if store_name == "memory":
        logger.info("Using in-memory submission store")
        return InMemorySubmissionRepository()
    if store_name == "redis":
        logger.info("Using Redis submission store")
        return RedisSubmissionRepository()

    raise ValueError(f"Unknown SUBMISSION_STORE: {store_name!r}")


def build_pipeline() -> SubmissionPipeline:
    """Build the pipeline from environment configuration."""
    storage = ImageStorageService()
    return SubmissionPipeline(
        repository=build_repository(),
        storage=storage,
        transformer=build_face_swap_client(storage),
        rate_limiter=FixedWindowRateLimiter(),
    )


def build_templates() -> Jinja2Templates:
    return Jinja2Templates(directory=str(TEMPLATES_DIR))


# ============================================================================
# DEPENDENCY PROVIDERS
# ============================================================================


def get_pipeline(request: Request) -> SubmissionPipeline:
    """
    Dependency provider for SubmissionPipeline.

    Returns:
        The pipeline attached to the application in create_app()
    """
    return request.app.state.pipeline


def get_templates(request: Request) -> Jinja2Templates:
    """Dependency provider for the Jinja2 page renderer."""
    return request.app.state.templates


def client_address(request: Request) -> str:
    """Caller address used as the rate-limit key."""
    return request.client.host if request.client else "unknown"


def wants_json(request: Request) -> bool:
    """True when the Accept header asks for JSON."""
    return "application/json" in request.headers.get("accept", "").lower()


def wants_html(request: Request) -> bool:
    """True when the client asks for HTML and not for JSON (browser form posts)."""
    accept = request.headers.get("accept", "").lower()
    return "text/html" in accept and "application/json" not in accept


# ============================================================================
# MULTIPART INTAKE
# ============================================================================


async def read_submission_form(
    request: Request,
    max_size_bytes: int = MAX_IMAGE_SIZE_BYTES,
) -> tuple[dict[str, Any], list[IncomingFile]]:
    """
    Parse a multipart submission into text fields and uploaded files.

    File parts with an empty filename (no file chosen in the browser) are
    dropped. At most max_size_bytes + 1 bytes are read from each file, so an
    oversized upload is detected without buffering all of it.

    Args:
        request: Incoming request
        max_size_bytes: Size limit enforced later by the storage layer

    Returns:
        Tuple of (text fields, uploaded files)

    Raises:
        UploadRejectedError: If the body is not valid multipart or exceeds
            the parser's file/field limits
    """
    try:
        form = await request.form(
            max_files=MAX_UPLOAD_FILES + 1,
            max_fields=MAX_FORM_FIELDS + 1,
        )
    except StarletteHTTPException as e:
        logger.warning(f"Multipart parsing failed: {e.detail}")
        raise UploadRejectedError(f"Upload rejected: {e.detail}") from e

    fields: dict[str, Any] = {}
    files: list[IncomingFile] = []

    try:
        for key, value in form.multi_items():
            if isinstance(value, UploadFile):
                if not value.filename:
                    continue
                data = await value.read(max_size_bytes + 1)
                files.append(
                    IncomingFile(
                        field_name=key,
                        filename=value.filename,
                        content_type=value.content_type or "",
                        data=data,
                        size=max(value.size or 0, len(data)),
                    )
                )
            else:
                fields[key] = value
    finally:
        await form.close()

    return fields, files
