"""
Application error taxonomy.

Route handlers, services and storage raise ``AppError``; the exception
handlers in ``middleware.error_handler`` are the only place that turns an
error into an HTTP status and response body.
"""

from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorKind(str, Enum):
    """Coarse error categories, each mapped to one HTTP status."""
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    UNAUTHORIZED = "unauthorized"
    UPSTREAM = "upstream"
    UNAVAILABLE = "unavailable"
    INTERNAL = "internal"


STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.UNAUTHORIZED: 401,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.UPSTREAM: 502,
    ErrorKind.UNAVAILABLE: 503,
    ErrorKind.INTERNAL: 500,
}


class AppError(Exception):
    """Error carrying its kind, a user-facing message and optional details."""

    def __init__(
        self,
        kind: ErrorKind,
        message: str,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.errors = errors

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "success": False,
            "statusCode": self.status_code,
            "message": self.message,
        }
        if self.errors:
            body["errors"] = self.errors
        return body


def not_found(what: str) -> AppError:
    return AppError(ErrorKind.NOT_FOUND, f"{what} not found")


def validation_failed(errors: List[Dict[str, Any]], message: str = "Validation error") -> AppError:
    return AppError(ErrorKind.VALIDATION, message, errors=errors)
