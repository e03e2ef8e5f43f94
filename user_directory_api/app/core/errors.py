"""
Error taxonomy for the user directory.

Every rejected operation raises exactly one :class:`ApiError` subclass.
The four kinds form a closed set; each carries a human readable message
that names the offending identifier or value.  The mapping from kind to
HTTP status lives here as a pure function so the service layer never
imports anything from the web framework.  Rendering the JSON envelope
is the job of ``app.api.error_handlers``.
"""

from enum import Enum
from typing import Any, Dict


class ErrorKind(str, Enum):
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    INTERNAL = "internal"
    CONFLICT = "conflict"


_STATUS_CODES = {
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.BAD_REQUEST: 400,
    ErrorKind.INTERNAL: 500,
    ErrorKind.CONFLICT: 409,
}


def status_code_for(kind: ErrorKind) -> int:
    """Return the HTTP status code used to report ``kind``."""
    return _STATUS_CODES[kind]


def error_body(message: str, status_code: int) -> Dict[str, Any]:
    """Build the uniform ``{"error": {...}}`` response envelope."""
    return {"error": {"message": message, "status": status_code}}


class ApiError(Exception):
    """Base class for all errors surfaced by the service layer."""

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    @property
    def status_code(self) -> int:
        return status_code_for(self.kind)

    def to_response(self) -> Dict[str, Any]:
        return error_body(self.message, self.status_code)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"


class NotFoundError(ApiError):
    """The referenced user does not exist."""

    kind = ErrorKind.NOT_FOUND


class BadRequestError(ApiError):
    """Caller supplied input failed validation."""

    kind = ErrorKind.BAD_REQUEST


class ConflictError(ApiError):
    """The mutation would break email uniqueness."""

    kind = ErrorKind.CONFLICT


class InternalError(ApiError):
    """Storage broke a precondition the caller had already checked."""

    kind = ErrorKind.INTERNAL


__all__ = [
    "ApiError",
    "BadRequestError",
    "ConflictError",
    "ErrorKind",
    "InternalError",
    "NotFoundError",
    "error_body",
    "status_code_for",
]
