"""
Error taxonomy shared by every feature, and the single place that maps
exceptions to HTTP responses.

Handlers raise one of the `ApiError` subclasses. Anything else that escapes
a handler (framework errors, store failures, timeouts) goes through
`classify()`, so every failure response has the same `{"error": ...}` shape.
"""

from __future__ import annotations

import logging

import asyncpg
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ApiError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"

    def __init__(self, message: str | None = None, *, headers: dict[str, str] | None = None) -> None:
        self.message = message or self.default_message
        self.headers = headers
        super().__init__(self.message)


class BadRequest(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required fields"


class Unauthorized(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class Conflict(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Already exists"


class Internal(ApiError):
    pass


_BY_STATUS: dict[int, type[ApiError]] = {
    cls.status_code: cls for cls in (BadRequest, Unauthorized, Forbidden, NotFound, Conflict)
}


def _validation_message(exc: RequestValidationError) -> str:
    fields: list[str] = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        name = ".".join(loc)
        if name and name not in fields:
            fields.append(name)
    if not fields:
        return BadRequest.default_message
    return f"Missing or invalid fields: {', '.join(fields)}"


def classify(exc: Exception) -> ApiError:
    """
    Map any exception onto the error taxonomy.
    """
    if isinstance(exc, ApiError):
        return exc
    if isinstance(exc, RequestValidationError):
        return BadRequest(_validation_message(exc))
    if isinstance(exc, StarletteHTTPException):
        error_cls = _BY_STATUS.get(exc.status_code)
        detail = exc.detail if isinstance(exc.detail, str) else None
        if error_cls is None:
            err = ApiError(detail, headers=exc.headers)
            err.status_code = exc.status_code
            return err
        return error_cls(detail, headers=exc.headers)
    if isinstance(exc, asyncpg.UniqueViolationError):
        return Conflict()
    return Internal()


def _error_response(err: ApiError) -> JSONResponse:
    return JSONResponse(status_code=err.status_code, content={"error": err.message}, headers=err.headers)


async def _handle(request: Request, exc: Exception) -> JSONResponse:
    err = classify(exc)
    if err.status_code >= 500:
        logger.exception(
            "request_failed method=%s path=%s", request.method, request.url.path, exc_info=exc
        )
    return _error_response(err)


def install_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _handle)
    app.add_exception_handler(RequestValidationError, _handle)
    app.add_exception_handler(StarletteHTTPException, _handle)
    app.add_exception_handler(asyncpg.PostgresError, _handle)
    app.add_exception_handler(TimeoutError, _handle)
    app.add_exception_handler(Exception, _handle)
