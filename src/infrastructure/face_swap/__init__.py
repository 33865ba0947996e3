"""
Face Swap Infrastructure Module

Clients for the external face swap service.

Exports:
    - HttpFaceSwapClient: Calls the external HTTP service
    - SimulatedFaceSwapClient: Offline stand-in (copies the source image)
    - build_face_swap_client: Picks a client from configuration
    - detect_image_format: Byte-signature format detection
"""

from .base_client import FaceSwapClientBase, detect_image_format
from .factory import build_face_swap_client
from .http_client import HttpFaceSwapClient
from .simulated_client import SimulatedFaceSwapClient

__all__ = [
    "FaceSwapClientBase",
    "HttpFaceSwapClient",
    "SimulatedFaceSwapClient",
    "build_face_swap_client",
    "detect_image_format",
]
