# constellation/core/errors.py
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class DomainError(Exception):
    """
    Base for every error a service raises on purpose.
    The API layer renders it as {"detail": message} with `status_code`.
    """

    status_code = 400
    kind = "error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationFailed(DomainError):
    status_code = 400
    kind = "validation"


class Unauthorized(DomainError):
    status_code = 401
    kind = "unauthorized"


class Forbidden(DomainError):
    status_code = 403
    kind = "forbidden"


class NotFound(DomainError):
    status_code = 404
    kind = "not_found"


class Conflict(DomainError):
    status_code = 409
    kind = "conflict"


class PersistenceFailed(DomainError):
    status_code = 500
    kind = "internal"


def _request_id(request: Request):
    return getattr(request.state, "request_id", None)


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    err = errors[0]
    loc = [str(p) for p in err.get("loc", []) if p not in ("body", "query", "path")]
    msg = str(err.get("msg", "Invalid value"))
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(DomainError)
    async def domain_error_handler(request: Request, exc: DomainError):
        if exc.status_code >= 500:
            logger.error("domain error", extra={"kind": exc.kind, "detail": exc.message})
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.message, "request_id": _request_id(request)},
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=400,
            content={
                "detail": _first_validation_message(exc),
                "request_id": _request_id(request),
            },
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception: %s", exc, exc_info=True)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error", "request_id": _request_id(request)},
        )
