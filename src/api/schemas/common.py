"""
Common API Schemas

Shared Pydantic models used across all API routers.
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """
    Standard error response model for all API errors.

    Provides consistent error structure across all endpoints.

    Attributes:
        success: Always False
        code: Machine-readable error code (e.g., "VALIDATION_ERROR", "NOT_FOUND")
        message: Human-readable error message
        details: Optional additional error details (validation errors, echoed form data)
    """

    success: bool = Field(default=False, description="Always false for errors")
    code: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error message")
    details: Optional[Dict[str, Any]] = Field(
        default=None, description="Additional error context"
    )

    class Config:
        json_schema_extra = {
            "example": {
                "success": False,
                "code": "VALIDATION_ERROR",
                "message": "Name must be between 4 and 30 characters long",
                "details": {
                    "errors": ["Name must be between 4 and 30 characters long"],
                    "formData": {
                        "name": "Al",
                        "email": "al@example.com",
                        "phone": "1234567890",
                        "terms": "on",
                    },
                },
            }
        }


class MessageResponse(BaseModel):
    """Plain success acknowledgement."""

    success: bool = True
    message: str
