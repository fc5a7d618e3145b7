"""Translate errors into JSON error responses."""

import logging
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shortlinks.errors import ShortenerError

logger = logging.getLogger("url_shortener.route")


def error_response(status_code: int, message: str) -> JSONResponse:
    """JSON body ``{error, message, timestamp}`` for ``status_code``."""
    return JSONResponse(
        status_code=status_code,
        content={
            "error": HTTPStatus(status_code).phrase,
            "message": message,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )


async def shortener_error_handler(request: Request, exc: ShortenerError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.message}",
            extra={"path": request.url.path},
        )
        return error_response(exc.status_code, "Internal error")
    return error_response(exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = f"Invalid {field}: {first.get('msg')}" if field else "Invalid request body"
    logger.warning(message, extra={"path": request.url.path})
    return error_response(400, message)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        f"Unhandled error on {request.method} {request.url.path}",
        extra={"path": request.url.path},
    )
    return error_response(500, "Internal error")


def register_error_handlers(app: FastAPI) -> None:
    """Install the handlers on ``app``."""
    app.add_exception_handler(ShortenerError, shortener_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
