"""Error Handlers — global exception handlers for the Invoicer API.

Invariants:
    - Every handled failure is rendered by an InvoicerError's to_response()
    - Bad path/query parameters answer 400 as {message, errors}, keyed by the
      parameter name, the same shape a rejected invoice form gets
    - Unexpected exceptions answer an opaque 500 and never leak internal details
    - Log level follows severity: CRITICAL → error, anything lower → warning

Design Decisions:
    - RequestValidationError is converted into InvalidRequestError instead of having
      its own envelope, so there is a single response path
    - Registered from main.py after the routers
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from invoicer.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, InvalidRequestError, InvoicerError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(InvoicerError, invoicer_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unexpected_error_handler)


def render_error(request: Request, exc: InvoicerError) -> JSONResponse:
    level = logging.ERROR if exc.severity == ErrorSeverity.CRITICAL else logging.WARNING
    logger.log(
        level, f"{exc.code}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def invoicer_error_handler(request: Request, exc: InvoicerError):
    return render_error(request, exc)


def field_errors(exc: RequestValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by parameter name (last element of loc)."""
    errors: dict[str, list[str]] = {}
    for error in exc.errors():
        name = str(error["loc"][-1]) if error["loc"] else "request"
        errors.setdefault(name, []).append(error["msg"])
    return errors


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return render_error(request, InvalidRequestError(
        field_errors(exc), context=ErrorContext(path=request.url.path),
    ))


async def unexpected_error_handler(request: Request, exc: Exception):
    """Catch-all. Logs the traceback, answers without details."""
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"path": request.url.path},
    )
    internal = InvoicerError(
        "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL, ErrorContext(path=request.url.path),
    )
    return JSONResponse(status_code=internal.http_status, content=internal.to_response())
