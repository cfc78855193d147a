"""
Exception handlers.

Translates every error that escapes a route into the standard failure
envelope. Module exceptions carry their own status and code; framework
errors are mapped to VALIDATION_ERROR, ENDPOINT_NOT_FOUND or HTTP_ERROR;
anything else becomes an opaque INTERNAL_SERVER_ERROR.
"""

import logging
from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shared.exceptions import AllAccessError
from .models.errors import ErrorBody, ErrorResponse

logger = logging.getLogger(__name__)


def error_response(
    status_code: int,
    message: str,
    code: str,
    details: Optional[dict[str, Any]] = None,
    headers: Optional[dict[str, str]] = None,
) -> JSONResponse:
    body = ErrorResponse(error=ErrorBody(message=message, code=code, details=details))
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


async def handle_app_error(request: Request, exc: AllAccessError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.code)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.code)

    body = ErrorResponse(error=ErrorBody(**exc.to_dict()))
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    issues = [
        {
            "path": ".".join(str(part) for part in error.get("loc", ())),
            "message": error.get("msg", ""),
            "code": error.get("type", ""),
        }
        for error in exc.errors()
    ]
    return error_response(400, "Validation failed", "VALIDATION_ERROR", {"issues": issues})


async def handle_http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == 404:
        return error_response(404, "Endpoint not found", "ENDPOINT_NOT_FOUND")
    return error_response(
        exc.status_code,
        str(exc.detail),
        "HTTP_ERROR",
        headers=getattr(exc, "headers", None),
    )


async def handle_unexpected_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(500, "Internal server error", "INTERNAL_SERVER_ERROR")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AllAccessError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(Exception, handle_unexpected_error)
