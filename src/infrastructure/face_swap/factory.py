"""
Face Swap Client Factory

Chooses the face swap client at startup: the HTTP client when an API key is
configured, the simulated client otherwise.
"""

import logging
import os
from typing import Optional

from src.application.ports import ImageStorageProtocol, ImageTransformerProtocol
from src.infrastructure.face_swap.http_client import HttpFaceSwapClient
from src.infrastructure.face_swap.simulated_client import SimulatedFaceSwapClient

logger = logging.getLogger(__name__)


def build_face_swap_client(
    storage: ImageStorageProtocol,
    api_key: Optional[str] = None,
    api_url: Optional[str] = None,
) -> ImageTransformerProtocol:
    """
    Build the face swap client.

    Args:
        storage: Image storage shared with the pipeline
        api_key: Bearer token (default from env: FACE_SWAP_API_KEY)
        api_url: Endpoint (default from env: FACE_SWAP_API_URL)

    Returns:
        HttpFaceSwapClient when a key is configured, else SimulatedFaceSwapClient

    Examples:
        >>> build_face_swap_client(storage, api_key="").simulated
        True
    """
    key = api_key or os.getenv("FACE_SWAP_API_KEY")
    url = api_url or os.getenv("FACE_SWAP_API_URL")

    if key:
        if not url:
            logger.warning("FACE_SWAP_API_KEY set without FACE_SWAP_API_URL; calls will fail")
        logger.info("Using HTTP face swap client")
        return HttpFaceSwapClient(storage, api_key=key, api_url=url)

    logger.info("FACE_SWAP_API_KEY not configured; using simulated face swap client")
    return SimulatedFaceSwapClient(storage)
