"""
File Storage Infrastructure Module

Local file system storage for uploaded photos and face swap results.

Exports:
    - ImageStorageService: Upload intake, storage and cleanup (implements Protocol)
"""

from .image_storage_service import ImageStorageService

__all__ = [
    "ImageStorageService",
]
