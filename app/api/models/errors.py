"""API error response models."""
from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from aiready.errors import ErrorCodes

__all__ = ["ErrorCodes", "ErrorDetail", "ErrorResponse"]


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )


class ErrorResponse(BaseModel):
    """Standard error response format."""

    error: ErrorDetail

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": {
                    "code": "INVALID_SIGNALS",
                    "message": "Page signals are malformed",
                    "details": {"errors": ["status_code is required and must be an integer"]},
                }
            }
        }
    }
