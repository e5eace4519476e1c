"""Exception handlers that turn every failure into an error envelope."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from users_api.middleware import get_cors_headers
from users_api.models.envelope import error_body
from users_common.exceptions import MalformedRequestError, StoreUnavailableError, UsersError, ValidationError

logger = logging.getLogger(__name__)


def _field_name(loc: tuple[Any, ...]) -> str:
    parts = [str(part) for part in loc[1:]]
    return ".".join(parts) or str(loc[0])


async def users_error_handler(request: Request, exc: UsersError) -> JSONResponse:
    """Render a domain error."""
    if isinstance(exc, StoreUnavailableError):
        logger.error("Store unavailable during %s %s", request.method, request.url.path, exc_info=exc)
    else:
        logger.info("%s %s rejected: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.message, exc.details))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render FastAPI's own request parsing failures.

    A body that is not valid JSON, or not a JSON object, is rejected as
    malformed before any field rule runs. Bad query or path parameters are
    reported as field violations.
    """
    errors = exc.errors()
    if any(error["loc"] and error["loc"][0] == "body" for error in errors):
        error: UsersError = MalformedRequestError()
    else:
        error = ValidationError([{"field": _field_name(tuple(e["loc"])), "message": e["msg"]} for e in errors])
    return await users_error_handler(request, error)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render routing errors (unknown route, wrong method) as envelopes."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route {request.url.path} not found"
    else:
        message = str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content=error_body(message), headers=exc.headers)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort: log the failure and return an opaque 500 envelope."""
    logger.error("Unhandled exception: %s", exc, exc_info=True)

    # Errors raised past the CORS middleware need their headers set here
    settings = request.app.state.settings
    cors_headers = get_cors_headers(
        request.headers.get("origin"), ui_url=settings.ui_url, environment=settings.environment
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body("Internal server error"),
        headers=cors_headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach every envelope-producing handler to the application."""
    app.add_exception_handler(UsersError, users_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
