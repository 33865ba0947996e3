"""
Infrastructure Layer - External Dependencies

Implements technical capabilities that support the Domain and Application layers.
Handles all external dependencies: Redis, the file system, the face swap service.

Architecture:
    - Implements Domain repository interfaces (Dependency Inversion)
    - Implements Application Layer protocols (ImageStorageProtocol,
      ImageTransformerProtocol)
    - No Domain business logic (only technical implementations)

Modules:
    - persistence: Redis connection pool and submission repositories
    - file_storage: Upload intake and image storage
    - face_swap: HTTP and simulated face swap clients

Usage:
    >>> from src.infrastructure import ImageStorageService, build_face_swap_client
    >>> from src.infrastructure.persistence import RedisSubmissionRepository
"""

# Persistence
from .persistence import InMemorySubmissionRepository, RedisSubmissionRepository

# File Storage
from .file_storage import ImageStorageService

# Face Swap
from .face_swap import (
    HttpFaceSwapClient,
    SimulatedFaceSwapClient,
    build_face_swap_client,
)

__all__ = [
    # Persistence
    "InMemorySubmissionRepository",
    "RedisSubmissionRepository",
    # File Storage
    "ImageStorageService",
    # Face Swap
    "HttpFaceSwapClient",
    "SimulatedFaceSwapClient",
    "build_face_swap_client",
]
