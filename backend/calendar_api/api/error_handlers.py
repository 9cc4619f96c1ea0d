"""Error Handlers: global exception handlers for the calendar API.

Invariants:
    - InvalidInputError / RequestValidationError → 400 JSON envelope with field details
    - Unmatched route (Starlette 404 or 405) → 404 plain "Not Found"
    - Any other exception → 500 plain "Server Error: <description>"
    - No error escapes the request: every branch returns a response

Design Decisions:
    - Three-layer handler: domain (CalendarError), validation (Pydantic), routing (Starlette)
    - The catch-all lives in internal_error_response(), called by the CORS middleware,
      so 500s still carry CORS headers (Starlette runs Exception handlers outside
      every user middleware)
    - 405 folded into 404: clients only know "route exists" or "Not Found"
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from calendar_api.core.errors import (
    CalendarError, ErrorSeverity, InternalError, RouteNotFoundError,
)

logger = logging.getLogger(__name__)

NOT_FOUND_BODY = "Not Found"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_calendar_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)


def calendar_error_response(request: Request, exc: CalendarError) -> Response:
    """Render a CalendarError: plain text for 404/500, JSON envelope otherwise."""
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "method": request.method,
        },
    )
    if isinstance(exc, RouteNotFoundError):
        return PlainTextResponse(NOT_FOUND_BODY, status_code=exc.http_status)
    if isinstance(exc, InternalError):
        return PlainTextResponse(exc.message, status_code=exc.http_status)
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


def internal_error_response(request: Request, exc: Exception) -> Response:
    """Catch-all: 500 with a human-readable description of the failure."""
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc}",
        exc_info=exc,
        extra={"path": request.url.path, "method": request.method},
    )
    return calendar_error_response(request, InternalError(f"Server Error: {exc}"))


def _register_calendar_error_handler(app: FastAPI) -> None:
    """Register calendar domain error handler."""

    @app.exception_handler(CalendarError)
    async def calendar_error_handler(request: Request, exc: CalendarError):
        return calendar_error_response(request, exc)


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Malformed JSON, missing/blank fields, non-numeric ids."""
        logger.warning(
            f"Validation error on {request.url.path}: {exc.errors()}",
            extra={"path": request.url.path, "method": request.method},
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing error handler (unknown path or method)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code in (
            status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED,
        ):
            return calendar_error_response(
                request, RouteNotFoundError(request.method, request.url.path),
            )
        return PlainTextResponse(
            str(exc.detail), status_code=exc.status_code, headers=exc.headers,
        )


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Invalid request data",
            "category": "validation",
            "severity": ErrorSeverity.ERROR.value,
            "details": [
                {
                    "field": ".".join(str(loc) for loc in e["loc"]),
                    "message": e["msg"],
                    "type": e["type"],
                }
                for e in exc.errors()
            ],
        },
    }
