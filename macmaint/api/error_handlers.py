"""Error Handlers — global exception handlers for the REST surface.

Invariants:
    - Every error body is a MacMaintError envelope (to_response()), whatever raised it
    - A malformed request body reports as INVALID_ARGUMENT, like a schema violation
    - Unexpected exceptions answer 500 INTERNAL_ERROR without their message

Design Decisions:
    - The JSON-RPC route maps MacMaintError itself; these handlers serve /api/v1
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from macmaint.core.errors import (
    ErrorCategory, ErrorContext, ErrorSeverity, InvalidArgumentError, MacMaintError,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(MacMaintError, _handle_macmaint_error)
    app.add_exception_handler(RequestValidationError, _handle_malformed_body)
    app.add_exception_handler(Exception, _handle_unexpected)


def _tool_context(request: Request) -> ErrorContext:
    return ErrorContext(tool_name=request.path_params.get("name"))


def _respond(exc: MacMaintError) -> JSONResponse:
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def _handle_macmaint_error(request: Request, exc: MacMaintError):
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{exc.code} on {request.url.path}: {exc.message}",
        extra={"error_code": exc.code, "tool_name": exc.context.tool_name},
    )
    return _respond(exc)


async def _handle_malformed_body(request: Request, exc: RequestValidationError):
    problems = exc.errors()
    fields = [".".join(str(part) for part in p["loc"]) for p in problems]
    error = InvalidArgumentError(
        "; ".join(f"{f}: {p['msg']}" for f, p in zip(fields, problems)),
        field=fields[0] if fields else "body",
        context=_tool_context(request),
    )
    logger.warning(
        f"Malformed request on {request.url.path}: {error.message}",
        extra={"error_code": error.code, "tool_name": error.context.tool_name},
    )
    return _respond(error)


async def _handle_unexpected(request: Request, exc: Exception):
    """500 without internals; the traceback goes to the log only."""
    context = _tool_context(request)
    logger.error(
        f"Unhandled {type(exc).__name__} on {request.url.path}",
        exc_info=exc, extra={"tool_name": context.tool_name},
    )
    return _respond(MacMaintError(
        "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
        ErrorSeverity.CRITICAL, context, 500,
    ))
