"""
Application Layer Package

Responsibility:
    Coordinates the submission lifecycle between API and Domain layers.

Architecture Notes:
    - Orchestration layer between API and Domain
    - Ports (Protocols) implemented by Infrastructure Layer
    - Shared models (DTOs)

Contains:
    - ports/: Storage and transformer interfaces
    - queries/: Read-side reductions (statistics)
    - services/: SubmissionPipeline and the rate limiter
    - models: Shared Application Layer DTOs

Does NOT contain:
    - Domain business rules (in Domain Layer)
    - HTTP handling (in API Layer)
    - Infrastructure details (in Infrastructure Layer)
"""

# Re-export commonly used models for convenience
from src.application.models import StoredImage, SubmissionCreated, TransformResult

__all__ = [
    "StoredImage",
    "SubmissionCreated",
    "TransformResult",
]
