"""
Global exception handlers.

Every error leaves the service in the same envelope::

    {"error": {"message": "...", "status": 404}}

* ``ApiError`` → its own status code and message.
* ``RequestValidationError`` (missing fields, wrong types, malformed id
  or JSON) → 400 with the offending fields named in the message.
* Starlette ``HTTPException`` (unknown route, wrong method) → its status.
* Anything else → 500 without internal details; the traceback is logged.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.errors import ApiError, ErrorKind, error_body

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
        if exc.kind is ErrorKind.INTERNAL:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        else:
            logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.status_code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        message = describe_validation_errors(exc)
        logger.info("%s %s rejected (400): %s", request.method, request.url.path, message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(message, status.HTTP_400_BAD_REQUEST),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(str(exc.detail), exc.status_code),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", status.HTTP_500_INTERNAL_SERVER_ERROR),
        )


def describe_validation_errors(exc: RequestValidationError) -> str:
    """Flatten pydantic errors into ``"body.name: Field required; ..."``."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg', 'invalid value')}" if location else error.get("msg", ""))
    return "Invalid request: " + "; ".join(parts) if parts else "Invalid request"
