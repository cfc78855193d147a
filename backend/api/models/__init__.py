"""API models package."""

from .errors import ErrorBody, ErrorResponse

__all__ = [
    "ErrorBody",
    "ErrorResponse",
]
