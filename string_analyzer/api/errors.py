"""Boundary translation of errors into HTTP responses.

This is the only place where error kinds are mapped to status codes. Unclassified exceptions become
a generic 500 and are logged with their traceback; details are never sent to the client.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from string_analyzer.api.schemas import ErrorResponse
from string_analyzer.errors import (
    ConflictError,
    InvalidInputError,
    InvalidTypeError,
    NotFoundError,
    QueryParseError,
    StringAnalyzerError,
)

logger = logging.getLogger(__name__)

# Order matters: subclasses before their bases.
_STATUS_BY_ERROR: tuple[tuple[type[StringAnalyzerError], int], ...] = (
    (InvalidTypeError, status.HTTP_422_UNPROCESSABLE_CONTENT),
    (InvalidInputError, status.HTTP_400_BAD_REQUEST),
    (QueryParseError, status.HTTP_400_BAD_REQUEST),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def status_for(exc: StringAnalyzerError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(message=message)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def domain_error_handler(request: Request, exc: StringAnalyzerError) -> JSONResponse:
    status_code = status_for(exc)
    logger.info(
        "rejected %s %s status=%d reason=%s", request.method, request.url.path, status_code, exc
    )
    return _error_response(status_code, str(exc))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
    )
    logger.info("invalid request %s %s: %s", request.method, request.url.path, details)
    return _error_response(status.HTTP_400_BAD_REQUEST, "Invalid request body or parameters")


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return JSONResponse(status_code=exc.status_code, content={"error": "Route not found"})
    return _error_response(exc.status_code, str(exc.detail))


async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled error on %s %s", request.method, request.url.path)
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(api: FastAPI) -> None:
    api.add_exception_handler(StringAnalyzerError, domain_error_handler)
    api.add_exception_handler(RequestValidationError, validation_error_handler)
    api.add_exception_handler(StarletteHTTPException, http_error_handler)
    api.add_exception_handler(Exception, unexpected_error_handler)
