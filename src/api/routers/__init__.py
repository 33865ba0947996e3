"""
API Routers Package

Contains all FastAPI routers grouped by functionality.

Architecture Notes:
    - Part of API Layer (Presentation)
    - Routers are thin wrappers around SubmissionPipeline
    - All routers follow dependency injection pattern

Available Routers:
    - pages_router: Server-rendered form page
    - submissions_router: Submission lifecycle endpoints
    - system_router: Endpoint listing
"""

from .pages import router as pages_router
from .submissions import router as submissions_router
from .system import router as system_router

__all__ = ["pages_router", "submissions_router", "system_router"]
