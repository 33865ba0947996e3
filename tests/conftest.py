"""
Pytest Configuration and Shared Fixtures

This module contains pytest configuration and shared fixtures used across
all test suites (unit, integration).

Fixtures:
    - jpeg_bytes / png_bytes: Minimal payloads with valid image signatures
    - storage: ImageStorageService rooted in a temporary directory
    - repository: InMemorySubmissionRepository
    - transformer: SimulatedFaceSwapClient with zero delay
    - pipeline: SubmissionPipeline wired from the fixtures above
    - test_client: FastAPI TestClient around create_app(pipeline)
    - valid_fields: Form fields that pass validation

Architecture Notes:
    - No fixture touches Redis or the network
    - Every test gets its own upload directory (tmp_path)
    - TestClient doesn't require running server

Usage:
    def test_something(test_client):
        response = test_client.get("/health")
        assert response.status_code == 200
"""

import logging
import os
import tempfile
from typing import Generator

import pytest
from fastapi.testclient import TestClient

# Module-level app in src.api.main is built on import: keep it off Redis and the repo tree
os.environ.setdefault("SUBMISSION_STORE", "memory")
os.environ.setdefault(
    "UPLOAD_DIR", os.path.join(tempfile.gettempdir(), "faceswap-portal-test-uploads")
)

from src.api.main import create_app
from src.application.models import IncomingFile
from src.application.services import FixedWindowRateLimiter, SubmissionPipeline
from src.infrastructure.face_swap import SimulatedFaceSwapClient
from src.infrastructure.file_storage import ImageStorageService
from src.infrastructure.persistence.repositories import InMemorySubmissionRepository

# Configure logger for tests
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

JPEG_HEADER = b"\xff\xd8\xff\xe0\x00\x10JFIF\x00"
PNG_HEADER = b"\x89PNG\r\n\x1a\n"


# ============================================================================
# IMAGE PAYLOADS
# ============================================================================


@pytest.fixture
def jpeg_bytes() -> bytes:
    """Small payload with a JPEG signature."""
    return JPEG_HEADER + b"\x00" * 1024


@pytest.fixture
def png_bytes() -> bytes:
    """Small payload with a PNG signature."""
    return PNG_HEADER + b"\x00" * 1024


@pytest.fixture
def jpeg_upload(jpeg_bytes) -> IncomingFile:
    """IncomingFile as the HTTP layer would build it for a JPEG upload."""
    return IncomingFile(
        field_name="image",
        filename="portrait.jpg",
        content_type="image/jpeg",
        data=jpeg_bytes,
        size=len(jpeg_bytes),
    )


@pytest.fixture
def valid_fields() -> dict[str, str]:
    """Form fields that pass validation."""
    return {
        "name": "John Doe",
        "email": "JOHN@EXAMPLE.COM",
        "phone": "1234567890",
        "terms": "on",
    }


# ============================================================================
# PIPELINE FIXTURES
# ============================================================================


@pytest.fixture
def upload_dir(tmp_path):
    """Per-test upload directory."""
    return tmp_path / "uploads"


@pytest.fixture
def storage(upload_dir) -> ImageStorageService:
    return ImageStorageService(base_dir=str(upload_dir))


@pytest.fixture
def repository() -> InMemorySubmissionRepository:
    return InMemorySubmissionRepository()


@pytest.fixture
def transformer(storage) -> SimulatedFaceSwapClient:
    """Simulated face swap client without artificial delay."""
    return SimulatedFaceSwapClient(storage, delay_ms=0)


@pytest.fixture
def rate_limiter() -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(max_requests=10, window_seconds=900)


@pytest.fixture
def pipeline(repository, storage, transformer, rate_limiter) -> SubmissionPipeline:
    return SubmissionPipeline(
        repository=repository,
        storage=storage,
        transformer=transformer,
        rate_limiter=rate_limiter,
    )


@pytest.fixture
def test_client(pipeline) -> Generator[TestClient, None, None]:
    """
    FastAPI TestClient around an app using the in-memory pipeline.

    Yields:
        TestClient (lifespan events run on enter/exit)
    """
    app = create_app(pipeline=pipeline)
    with TestClient(app) as client:
        yield client


# ============================================================================
# PYTEST CONFIGURATION
# ============================================================================


def pytest_configure(config):
    """
    Pytest configuration hook.

    Registers custom markers for test categorization.
    """
    config.addinivalue_line(
        "markers", "integration: Integration tests (full HTTP stack, in-memory store)"
    )
    config.addinivalue_line("markers", "unit: Unit tests (no external dependencies)")
    config.addinivalue_line("markers", "slow: Slow tests (>1s execution time)")
