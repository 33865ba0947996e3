"""
Image Storage Port

Protocol for the durable image storage area used by the submission pipeline.
Implemented by src.infrastructure.file_storage.ImageStorageService.
"""

from typing import Any, Mapping, Optional, Protocol, Sequence

from src.application.models import IncomingFile, StoredImage


class ImageStorageProtocol(Protocol):
    """
    Storage area for original uploads and face swap results.

    Paths returned by this port are the only paths other components pass back.
    """

    def accept_upload(
        self,
        fields: Mapping[str, Any],
        files: Sequence[IncomingFile],
        field_name: str = "image",
    ) -> Optional[StoredImage]:
        """Check upload limits and store the single image (None when no file)."""
        ...

    def save_transformed(self, data: bytes, extension: str) -> StoredImage:
        """Store face swap result bytes in the swapped namespace."""
        ...

    def read_bytes(self, path: str) -> bytes:
        ...

    def exists(self, path: str) -> bool:
        ...

    def file_size(self, path: str) -> int:
        ...

    def delete(self, path: str) -> bool:
        """Remove a stored file; False when it was already gone."""
        ...

    def public_url(self, path: str) -> str:
        ...
