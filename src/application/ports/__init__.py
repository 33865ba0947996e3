"""
Application Layer Ports (Interfaces)

Contains Protocol definitions for dependency inversion.
Infrastructure Layer implements these protocols.
"""

from src.application.ports.file_storage import ImageStorageProtocol
from src.application.ports.image_transformer import ImageTransformerProtocol

__all__ = ["ImageStorageProtocol", "ImageTransformerProtocol"]
