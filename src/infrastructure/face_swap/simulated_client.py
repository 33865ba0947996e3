"""
Simulated Face Swap Client

Offline stand-in for the face swap service, used when no API key is configured.
Copies the source image into the swapped namespace after an artificial delay.
Results are flagged with `simulated=True`.
"""

import asyncio
import logging
import os
from pathlib import Path
from typing import Any, Optional

from src.application.models import TransformResult
from src.application.ports import ImageStorageProtocol
from src.domain.shared.exceptions import StorageError, TransformationError
from src.infrastructure.face_swap.base_client import FaceSwapClientBase

logger = logging.getLogger(__name__)


class SimulatedFaceSwapClient(FaceSwapClientBase):
    """
    Deterministic face swap stand-in.

    The "swapped" image is a byte-for-byte copy of the source, and the reported
    processing time equals the configured delay.

    Examples:
        >>> client = SimulatedFaceSwapClient(storage, delay_ms=0)
        >>> result = await client.transform("public/uploads/original/1700000000000-ab.jpg")
        >>> result.simulated
        True
    """

    simulated = True

    def __init__(
        self, storage: ImageStorageProtocol, delay_ms: Optional[int] = None
    ) -> None:
        """
        Args:
            storage: Image storage for reading sources and writing results
            delay_ms: Artificial delay (default from env: FACE_SWAP_SIMULATED_DELAY_MS or 2000)
        """
        super().__init__(storage)
        if delay_ms is None:
            delay_ms = int(os.getenv("FACE_SWAP_SIMULATED_DELAY_MS", "2000"))
        self.delay_ms = max(0, delay_ms)

    async def transform(
        self, source_path: str, target_path: Optional[str] = None
    ) -> TransformResult:
        """
        Copy the source image into the swapped namespace.

        Args:
            source_path: Stored original image
            target_path: Ignored

        Raises:
            TransformationError: If the source cannot be read or the copy cannot be stored
        """
        try:
            data = self.storage.read_bytes(source_path)
            stored = self.storage.save_transformed(
                data, Path(source_path).suffix or ".jpg"
            )
        except (OSError, StorageError) as e:
            logger.error(f"Simulated face swap error for {source_path}: {e}")
            raise TransformationError(f"Simulated face swap failed: {e}") from e

        if self.delay_ms:
            await asyncio.sleep(self.delay_ms / 1000)

        logger.info(f"Simulated face swap produced {stored.filename}")

        return TransformResult(
            swapped_path=stored.path,
            swapped_filename=stored.filename,
            swapped_url=stored.url,
            processing_time=self.delay_ms,
            simulated=True,
        )

    async def get_processing_status(self, job_id: str) -> dict[str, Any]:
        """Simulated jobs complete synchronously."""
        return {"job_id": job_id, "status": "completed", "simulated": True}
