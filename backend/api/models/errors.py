"""
Error response models.

Every failure is rendered as ``{"success": false, "error": {...}}`` with a
human-readable message and a stable machine code.
"""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class ErrorBody(BaseModel):
    """Error object inside the failure envelope."""

    # Some errors add top-level hints, e.g. upgrade_url
    model_config = ConfigDict(extra="allow")

    message: str
    code: str
    details: Optional[dict[str, Any]] = None


class ErrorResponse(BaseModel):
    """Standard error response format."""

    success: bool = False
    error: ErrorBody
