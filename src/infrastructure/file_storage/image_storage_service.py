"""
Image Storage Service

Manages uploaded photos and face swap results on the local file system.

Responsibility:
    - Enforce multipart upload limits (file count, field count/size, type, size)
    - Store originals under generated names (never the client-supplied name)
    - Store face swap results in a separate namespace
    - Read, stat and delete stored files; map paths to public URLs
    - Implements ImageStorageProtocol from Application Layer

Architecture Notes:
    - Infrastructure Layer (file system operations)
    - Used by SubmissionPipeline and the face swap clients
    - Atomic writes (write to .tmp, then rename)
    - Directory hierarchy created idempotently at construction and on demand

Storage Structure:
    Base directory: public/uploads (from env: UPLOAD_DIR)
        original/<epoch-ms>-<token><ext>          uploaded photos
        swapped/swapped_<epoch-ms>_<token><ext>   face swap results

    Served by the API under /uploads/<namespace>/<filename>.
"""

import logging
import mimetypes
import os
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

from src.application.models import IncomingFile, StoredImage
from src.domain.shared.exceptions import (
    FileSizeExceededError,
    StorageError,
    UploadRejectedError,
)
from src.domain.submission.constants import (
    ALLOWED_IMAGE_EXTENSIONS,
    ALLOWED_IMAGE_MIME_TYPES,
    IMAGE_FIELD_NAME,
    MAX_FIELD_NAME_BYTES,
    MAX_FIELD_VALUE_BYTES,
    MAX_FORM_FIELDS,
    MAX_IMAGE_SIZE_BYTES,
    MAX_UPLOAD_FILES,
)
from src.shared.utils import epoch_millis, generate_storage_token

# Configure logger for file storage operations
logger = logging.getLogger(__name__)

ORIGINAL_NAMESPACE = "original"
SWAPPED_NAMESPACE = "swapped"
PUBLIC_URL_PREFIX = "/uploads"


class ImageStorageService:
    """
    Durable storage area for original uploads and face swap results.

    Implements ImageStorageProtocol from Application Layer.

    Business Rules:
        - Exactly one file, under the "image" field
        - At most 10 text fields; field names up to 100 bytes, values up to 1 KiB
        - Extension .jpg/.jpeg/.png and MIME image/jpeg, image/jpg or image/png
        - Max file size: 2 MiB (from env: MAX_IMAGE_SIZE_BYTES)
        - Generated names: current time + random token + lower-cased extension

    Examples:
        >>> storage = ImageStorageService(base_dir="/tmp/uploads")
        >>> stored = storage.accept_upload(
        ...     {"name": "John Doe"},
        ...     [IncomingFile(field_name="image", filename="me.JPG",
        ...                   content_type="image/jpeg", data=jpeg_bytes,
        ...                   size=len(jpeg_bytes))],
        ... )
        >>> stored.filename
        '1700000000000-3f9a0c1b2d4e5.jpg'
        >>> stored.url
        '/uploads/original/1700000000000-3f9a0c1b2d4e5.jpg'
    """

    def __init__(
        self,
        base_dir: Optional[str] = None,
        max_size_bytes: Optional[int] = None,
    ) -> None:
        """
        Initialize storage with configuration and create the directory layout.

        Args:
            base_dir: Base directory (default from env: UPLOAD_DIR or "public/uploads")
            max_size_bytes: Max image size (default from env: MAX_IMAGE_SIZE_BYTES or 2 MiB)

        Raises:
            StorageError: If the directories cannot be created
        """
        self.base_dir = Path(base_dir or os.getenv("UPLOAD_DIR", "public/uploads"))
        self.max_size_bytes = max_size_bytes or int(
            os.getenv("MAX_IMAGE_SIZE_BYTES", str(MAX_IMAGE_SIZE_BYTES))
        )
        self.original_dir = self.base_dir / ORIGINAL_NAMESPACE
        self.swapped_dir = self.base_dir / SWAPPED_NAMESPACE

        self.ensure_directories()

    def ensure_directories(self) -> None:
        """Create base, original and swapped directories (mkdir -p, idempotent)."""
        for directory in (self.base_dir, self.original_dir, self.swapped_dir):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                logger.error(f"Error creating directory {directory}: {e}")
                raise StorageError(f"Cannot create storage directory {directory}") from e

    # ========================================================================
    # UPLOAD INTAKE
    # ========================================================================

    def accept_upload(
        self,
        fields: Mapping[str, Any],
        files: Sequence[IncomingFile],
        field_name: str = IMAGE_FIELD_NAME,
    ) -> Optional[StoredImage]:
        """
        Enforce upload limits and store the single accepted image.

        Process Flow:
            1. Check text field count, name sizes and value sizes
            2. Check file field name and file count
            3. Return None when no file was sent
            4. Check extension + MIME type, then size
            5. Write atomically to original/<epoch-ms>-<token><ext>

        Args:
            fields: Text form fields
            files: Uploaded files (empty-filename parts already dropped)
            field_name: The only accepted file field

        Returns:
            StoredImage, or None when no file was uploaded

        Raises:
            UploadRejectedError: If any limit is violated (nothing is written)
            FileSizeExceededError: If the file exceeds max_size_bytes
            StorageError: If the file cannot be written
        """
        self._check_fields(fields)

        for upload in files:
            if upload.field_name != field_name:
                logger.warning(f"Unexpected file field: {upload.field_name!r}")
                raise UploadRejectedError(
                    "Unexpected file field. Please use the correct form."
                )

        if len(files) > MAX_UPLOAD_FILES:
            raise UploadRejectedError("Too many files. Only one image can be uploaded.")

        if not files:
            return None

        upload = files[0]
        extension = Path(upload.filename).suffix.lower()
        mime_type = (upload.content_type or "").lower()

        if (
            extension not in ALLOWED_IMAGE_EXTENSIONS
            or mime_type not in ALLOWED_IMAGE_MIME_TYPES
        ):
            logger.warning(
                f"Rejected upload {upload.filename!r}: type {mime_type!r}, extension {extension!r}"
            )
            raise UploadRejectedError("Only JPG, JPEG, and PNG images are allowed")

        size = max(upload.size, len(upload.data))
        if size > self.max_size_bytes:
            logger.warning(
                f"Rejected upload {upload.filename!r}: {size} bytes > {self.max_size_bytes}"
            )
            raise FileSizeExceededError(
                "File size too large. Maximum allowed size is 2MB.",
                file_size=size,
                max_size=self.max_size_bytes,
            )

        filename = f"{epoch_millis()}-{generate_storage_token()}{extension}"
        path = self.original_dir / filename
        self._atomic_write_file(path, upload.data)

        logger.info(
            f"File uploaded: original={upload.filename!r}, stored={filename}, "
            f"type={mime_type}, size={len(upload.data)}"
        )

        return StoredImage(
            path=str(path),
            filename=filename,
            original_filename=upload.filename,
            mime_type=mime_type,
            size=len(upload.data),
            url=self.public_url(str(path)),
        )

    def _check_fields(self, fields: Mapping[str, Any]) -> None:
        if len(fields) > MAX_FORM_FIELDS:
            raise UploadRejectedError("Too many form fields")

        for name, value in fields.items():
            if len(str(name).encode("utf-8")) > MAX_FIELD_NAME_BYTES:
                raise UploadRejectedError("Field name too long")
            if len(str(value).encode("utf-8")) > MAX_FIELD_VALUE_BYTES:
                raise UploadRejectedError(f"Field value too long: {name}")

    # ========================================================================
    # TRANSFORMED IMAGES
    # ========================================================================

    def save_transformed(self, data: bytes, extension: str) -> StoredImage:
        """
        Store face swap result bytes in the swapped namespace.

        Args:
            data: Image content
            extension: File extension with or without leading dot (".jpg", "png")

        Returns:
            StoredImage pointing at swapped/swapped_<epoch-ms>_<token><ext>

        Raises:
            StorageError: If the file cannot be written
        """
        ext = extension.lower() if extension.startswith(".") else f".{extension.lower()}"
        filename = f"swapped_{epoch_millis()}_{generate_storage_token()}{ext}"
        path = self.swapped_dir / filename

        self.swapped_dir.mkdir(parents=True, exist_ok=True)
        self._atomic_write_file(path, data)

        mime_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        logger.debug(f"Stored transformed image {filename} ({len(data)} bytes)")

        return StoredImage(
            path=str(path),
            filename=filename,
            mime_type=mime_type,
            size=len(data),
            url=self.public_url(str(path)),
        )

    # ========================================================================
    # FILE ACCESS
    # ========================================================================

    def read_bytes(self, path: str) -> bytes:
        """
        Read a stored file.

        Raises:
            FileNotFoundError: If the file does not exist
            StorageError: If the file cannot be read
        """
        try:
            return Path(path).read_bytes()
        except FileNotFoundError:
            raise
        except OSError as e:
            logger.error(f"Error reading {path}: {e}")
            raise StorageError(f"Cannot read stored file {path}") from e

    def exists(self, path: str) -> bool:
        """Check whether a stored file exists."""
        return bool(path) and Path(path).is_file()

    def file_size(self, path: str) -> int:
        """
        Size of a stored file in bytes.

        Raises:
            FileNotFoundError: If the file does not exist
        """
        return Path(path).stat().st_size

    def delete(self, path: str) -> bool:
        """
        Delete a stored file.

        Returns:
            True if the file was removed, False if it did not exist

        Raises:
            StorageError: If the file exists but cannot be removed
        """
        try:
            Path(path).unlink()
        except FileNotFoundError:
            logger.debug(f"File already gone: {path}")
            return False
        except OSError as e:
            raise StorageError(f"Cannot delete stored file {path}: {e}") from e

        logger.info(f"Cleaned up file: {path}")
        return True

    def public_url(self, path: str) -> str:
        """
        Map a storage path to its public URL.

        Examples:
            >>> storage.public_url("public/uploads/swapped/swapped_1_abc.jpg")
            '/uploads/swapped/swapped_1_abc.jpg'
        """
        file_path = Path(path)
        try:
            relative = file_path.resolve().relative_to(self.base_dir.resolve())
        except ValueError:
            return f"{PUBLIC_URL_PREFIX}/{file_path.name}"
        return f"{PUBLIC_URL_PREFIX}/{relative.as_posix()}"

    def _atomic_write_file(self, file_path: Path, data: bytes) -> None:
        """
        Write file atomically: write {file_path}.tmp, then rename over the target.

        Raises:
            StorageError: If the temporary file cannot be written or renamed
        """
        tmp_path = file_path.with_name(file_path.name + ".tmp")
        try:
            tmp_path.write_bytes(data)
            os.replace(tmp_path, file_path)
        except OSError as e:
            logger.error(f"Atomic write failed for {file_path}: {e}")
            tmp_path.unlink(missing_ok=True)
            raise StorageError(f"Cannot write file {file_path.name}") from e
