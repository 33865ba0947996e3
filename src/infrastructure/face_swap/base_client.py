"""
Face Swap Client Base

Behaviour shared by every face swap client: the image authenticity pre-check
and best-effort cleanup of stored files.

Responsibility:
    - Detect image format from byte signatures
    - validate_image(): size + signature check of a stored file
    - cleanup(): delete files, logging (never raising) individual failures

Architecture Notes:
    - Infrastructure Layer
    - Subclasses implement transform() and get_processing_status()
    - Together they satisfy ImageTransformerProtocol from Application Layer
"""

import logging
from typing import Iterable, Optional

from src.application.models import ImageCheck
from src.application.ports import ImageStorageProtocol
from src.domain.shared.exceptions import StorageError
from src.domain.submission.constants import IMAGE_SIGNATURES, MAX_IMAGE_SIZE_BYTES

logger = logging.getLogger(__name__)

# Shortest signature is 3 bytes, but anything under 4 bytes is not an image
MIN_IMAGE_HEADER_BYTES = 4


def detect_image_format(data: bytes) -> Optional[str]:
    """
    Detect image format from the leading bytes.

    Args:
        data: File content (or at least its first 4 bytes)

    Returns:
        "jpeg", "png", "gif" or "webp"; None when no signature matches

    Examples:
        >>> detect_image_format(b"\\xff\\xd8\\xff\\xe0\\x00\\x10JFIF")
        'jpeg'
        >>> detect_image_format(b"hello")
        None
    """
    if not data or len(data) < MIN_IMAGE_HEADER_BYTES:
        return None

    for image_format, signature in IMAGE_SIGNATURES:
        if data.startswith(signature):
            return image_format

    return None


class FaceSwapClientBase:
    """
    Shared pre-check and cleanup for face swap clients.

    Attributes:
        storage: Image storage the client reads from and writes results to
        max_size_bytes: Largest image accepted by validate_image()
        simulated: True for clients that never call the external service
    """

    simulated: bool = False

    def __init__(
        self,
        storage: ImageStorageProtocol,
        max_size_bytes: int = MAX_IMAGE_SIZE_BYTES,
    ) -> None:
        self.storage = storage
        self.max_size_bytes = max_size_bytes

    def validate_image(self, path: str) -> ImageCheck:
        """
        Re-read a stored image and check size and format signature.

        Args:
            path: Storage path of the image

        Returns:
            ImageCheck(valid=True, format, size) or ImageCheck(valid=False, error)

        Examples:
            >>> client.validate_image("public/uploads/original/1700000000000-ab.jpg")
            ImageCheck(valid=True, error=None, format='jpeg', size=10240)
            >>> client.validate_image("public/uploads/original/fake.jpg")
            ImageCheck(valid=False, error='Invalid image format', format=None, size=None)
        """
        try:
            size = self.storage.file_size(path)
            if size > self.max_size_bytes:
                return ImageCheck(
                    valid=False, error="Image file is too large (max 2MB allowed)"
                )

            image_format = detect_image_format(self.storage.read_bytes(path))
        except (OSError, StorageError) as e:
            logger.warning(f"Failed to validate image {path}: {e}")
            return ImageCheck(valid=False, error=f"Failed to validate image: {e}")

        if image_format is None:
            return ImageCheck(valid=False, error="Invalid image format")

        return ImageCheck(valid=True, format=image_format, size=size)

    def cleanup(self, paths: Iterable[Optional[str]]) -> None:
        """
        Delete stored files, best effort.

        Empty entries are skipped. Each failure is logged and the remaining
        files are still processed.

        Args:
            paths: Storage paths to delete
        """
        for path in paths:
            if not path:
                continue
            try:
                self.storage.delete(path)
            except Exception as e:
                logger.error(f"Failed to clean up file {path}: {e}")
