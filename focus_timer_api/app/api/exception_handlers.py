"""
Exception handlers for the FastAPI application.

Operation errors and request validation failures are turned into the
same body shape::

    {"error": {"kind": "...", "message": "...", "details": {...}}}
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from focus_timer_api.app.core.exceptions import FocusTimerError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)


async def focus_timer_error_handler(request: Request, exc: FocusTimerError) -> JSONResponse:
    """Handle all FocusTimerError exceptions."""
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, UnauthorizedError) else None
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)


async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed request bodies and parameters as ``validation_error``."""
    errors = []
    for error in exc.errors():
        errors.append({
            "field": ".".join(str(x) for x in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        })
    error = ValidationError("Request validation failed", errors=errors)
    logger.debug("%s %s: %s", request.method, request.url.path, errors)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(FocusTimerError, focus_timer_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
