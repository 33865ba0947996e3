"""
Image Transformer Port

Protocol for the face swap service client.
Implemented by HttpFaceSwapClient and SimulatedFaceSwapClient
(src.infrastructure.face_swap).
"""

from typing import Any, Iterable, Optional, Protocol

from src.application.models import ImageCheck, TransformResult


class ImageTransformerProtocol(Protocol):
    """
    Face swap service client.

    Attributes:
        simulated: True when results are produced locally without the service
    """

    simulated: bool

    def validate_image(self, path: str) -> ImageCheck:
        """Re-read a stored file and check size and format signature."""
        ...

    async def transform(
        self, source_path: str, target_path: Optional[str] = None
    ) -> TransformResult:
        """
        Run the face swap and store the result.

        Raises:
            TransformationError: On any service, connection or configuration failure
        """
        ...

    def cleanup(self, paths: Iterable[Optional[str]]) -> None:
        """Best-effort deletion; failures are logged, never raised."""
        ...

    async def get_processing_status(self, job_id: str) -> dict[str, Any]:
        """Query the service for an asynchronous job's status."""
        ...
