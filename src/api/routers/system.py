"""
API Router for Service Metadata

Contains:
    - GET /api/docs - Plain endpoint listing (complements the OpenAPI docs at /docs)
"""

from typing import Any, Dict

from fastapi import APIRouter, status

router = APIRouter(tags=["system"])

API_TITLE = "Face Swap Portal API"
API_VERSION = "1.0.0"

ENDPOINTS: list[Dict[str, Any]] = [
    {"method": "GET", "path": "/", "description": "Render submission form"},
    {
        "method": "POST",
        "path": "/submit",
        "description": "Submit form with image for face swap",
        "parameters": {
            "name": "string (4-30 chars, alphabetic)",
            "email": "string (valid email format)",
            "phone": "string (exactly 10 digits)",
            "terms": "boolean (required)",
            "image": "file (JPG/PNG, max 2MB)",
        },
    },
    {
        "method": "GET",
        "path": "/submissions",
        "description": "List all submissions with pagination",
        "parameters": {
            "page": "number (optional, default: 1)",
            "limit": "number (optional, default: 10, max: 50)",
            "sort": "string (optional, fields: name, email, createdAt, updatedAt; prefix - for descending)",
        },
    },
    {
        "method": "GET",
        "path": "/submissions/{id}",
        "description": "Get specific submission details",
    },
    {
        "method": "GET",
        "path": "/submissions/{id}/download",
        "description": "Download face-swapped image",
    },
    {
        "method": "DELETE",
        "path": "/submissions/{id}",
        "description": "Delete submission and its images (admin)",
    },
    {
        "method": "GET",
        "path": "/api/submissions/lookup",
        "description": "Find submissions by email address",
        "parameters": {"email": "string (valid email format)"},
    },
    {"method": "GET", "path": "/api/stats", "description": "Get submission statistics"},
    {"method": "GET", "path": "/health", "description": "Health check"},
]


@router.get(
    "/api/docs",
    status_code=status.HTTP_200_OK,
    summary="Endpoint listing",
)
async def api_docs() -> Dict[str, Any]:
    """Static description of the public endpoints."""
    return {"title": API_TITLE, "version": API_VERSION, "endpoints": ENDPOINTS}
