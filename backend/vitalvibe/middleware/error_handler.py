"""
Exception handlers - the single place where errors become HTTP responses.

Every error body has the shape
``{"success": false, "statusCode": N, "message": "...", "errors"?: [...]}``.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.errors import AppError, ErrorKind
from ..storage.interface import (
    DuplicateKeyError,
    InvalidDocumentId,
    StorageError,
    StorageUnavailable,
)

logger = logging.getLogger(__name__)


def _respond(error: AppError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def storage_error_to_app_error(exc: StorageError) -> AppError:
    """Map a store failure onto the application error kinds."""
    if isinstance(exc, DuplicateKeyError):
        return AppError(ErrorKind.CONFLICT, f"{exc.key} already exists")
    if isinstance(exc, InvalidDocumentId):
        return AppError(ErrorKind.VALIDATION, "Invalid ID format")
    if isinstance(exc, StorageUnavailable):
        return AppError(ErrorKind.UNAVAILABLE, "Database unavailable")
    return AppError(ErrorKind.INTERNAL, "Database error")


def _field_name(loc) -> str:
    parts = [str(part) for part in loc if part not in ("body", "query", "path")]
    return ".".join(parts) or "request"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.message}",
            extra={"extra_fields": {"kind": exc.kind.value, "path": request.url.path}}
        )
    return _respond(exc)


async def storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    error = storage_error_to_app_error(exc)
    log = logger.error if error.status_code >= 500 else logger.warning
    log(
        f"Storage error on {request.method} {request.url.path}: {exc}",
        extra={"extra_fields": {"kind": error.kind.value, "error_type": type(exc).__name__}}
    )
    return _respond(error)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": _field_name(err.get("loc", ())), "message": err.get("msg", "Invalid value")}
        for err in exc.errors()
    ]
    return _respond(AppError(ErrorKind.VALIDATION, "Validation error", errors=errors))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    kind = {
        400: ErrorKind.VALIDATION,
        401: ErrorKind.UNAUTHORIZED,
        404: ErrorKind.NOT_FOUND,
        409: ErrorKind.CONFLICT,
    }.get(exc.status_code)
    if kind is None:
        body = {"success": False, "statusCode": exc.status_code, "message": str(exc.detail)}
        return JSONResponse(status_code=exc.status_code, content=body)
    if exc.status_code == 404 and exc.detail == "Not Found":
        return _respond(AppError(kind, f"Route {request.url.path} not found"))
    return _respond(AppError(kind, str(exc.detail)))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled error on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
        extra={"extra_fields": {"path": request.url.path, "error_type": type(exc).__name__}}
    )
    return _respond(AppError(ErrorKind.INTERNAL, "Internal server error"))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
