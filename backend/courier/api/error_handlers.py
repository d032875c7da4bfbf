"""Error Handlers — every failure leaves the API as a CourierError envelope.

Invariants:
    - CourierError → its own http_status and to_response() body
    - A missing x-access-token header → 400 MISSING_ACCESS_TOKEN, apart from
      other validation failures
    - Any other RequestValidationError → 400 VALIDATION_ERROR with field details
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details

Design Decisions:
    - Validation and unexpected failures are converted into CourierError
      subclasses, so there is one renderer and one response shape
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from courier.core.errors import (
    CourierError,
    InternalError,
    InvalidRequestError,
    MissingAccessTokenError,
)

logger = logging.getLogger(__name__)

_ACCESS_TOKEN_LOC = ("header", "x-access-token")


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""

    @app.exception_handler(CourierError)
    async def courier_error_handler(request: Request, exc: CourierError):
        return _render(request, exc)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        return _render(request, _from_validation(exc.errors()))

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        logger.error(
            f"Unhandled {type(exc).__name__}",
            exc_info=exc, extra={"path": request.url.path},
        )
        return _render(request, InternalError())


def _from_validation(errors) -> CourierError:
    if any(tuple(e["loc"]) == _ACCESS_TOKEN_LOC for e in errors):
        return MissingAccessTokenError()
    return InvalidRequestError([
        {
            "field": ".".join(str(loc) for loc in e["loc"]),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ])


def _render(request: Request, exc: CourierError) -> JSONResponse:
    log = logger.error if exc.http_status >= 500 else logger.warning
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={"error_code": exc.code, "path": request.url.path},
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())
