"""Translate domain and framework exceptions into the JSON error envelope.

Every error response has the shape ``{"success": false, "message": ...}``,
with an ``errors`` list of ``"<field>: <message>"`` strings for validation
failures.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from skill_exchange.exceptions import (
    InternalError,
    InvalidIdentifierError,
    NotFoundError,
    SkillExchangeError,
    ValidationError,
)


logger = logging.getLogger(__name__)

_GENERIC_ERROR = "An unexpected error occurred. Please try again later."

# Map exception types to HTTP status codes; looked up along the MRO.
_STATUS_MAP: dict[type, int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    InvalidIdentifierError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InternalError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def _envelope(status_code: int, message: str, errors: list[str] | None = None) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def _status_for(exc: Exception) -> int:
    for cls in type(exc).__mro__:
        if cls in _STATUS_MAP:
            return _STATUS_MAP[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def format_validation_error(error: dict[str, Any]) -> str:
    loc = [str(part) for part in error.get("loc", ()) if part not in _LOCATION_PREFIXES]
    message = str(error.get("msg") or "Invalid value")
    # pydantic prefixes messages raised from validators.
    if message.startswith("Value error, "):
        message = message[len("Value error, "):]
    field = ".".join(loc)
    return f"{field}: {message}" if field else message


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [format_validation_error(err) for err in exc.errors()]
    return await domain_error_handler(request, ValidationError(errors))


async def domain_error_handler(request: Request, exc: SkillExchangeError) -> JSONResponse:
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error("handled_error type=%s path=%s", type(exc).__name__, request.url.path, exc_info=exc.__cause__ or exc)
        return _envelope(status_code, _GENERIC_ERROR)

    logger.info("handled_error type=%s status=%s path=%s", type(exc).__name__, status_code, request.url.path)
    if isinstance(exc, ValidationError):
        return _envelope(status_code, exc.message, exc.errors)
    return _envelope(status_code, str(exc))


async def store_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Store failures are not retried; they surface as a generic 500.
    internal = InternalError(f"Store failure: {type(exc).__name__}")
    internal.__cause__ = exc
    return await domain_error_handler(request, internal)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    response = _envelope(exc.status_code, str(exc.detail))
    if exc.headers:
        response.headers.update(exc.headers)
    return response


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error type=%s path=%s", type(exc).__name__, request.url.path, exc_info=exc)
    return _envelope(status.HTTP_500_INTERNAL_SERVER_ERROR, _GENERIC_ERROR)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(SkillExchangeError, domain_error_handler)
    app.add_exception_handler(SQLAlchemyError, store_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
