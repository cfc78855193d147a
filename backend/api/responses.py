"""
Success envelope helper.

Routes return ``success_response(...)`` so every payload has the same
shape as the error envelope produced by api.errors.
"""

from typing import Any, Optional

from fastapi.encoders import jsonable_encoder


def success_response(data: Any = None, meta: Optional[dict[str, Any]] = None) -> dict[str, Any]:
    """Wrap ``data`` as ``{"success": true, "data": ..., "meta"?: ...}``."""
    body: dict[str, Any] = {"success": True, "data": jsonable_encoder(data)}
    if meta:
        body["meta"] = meta
    return body
