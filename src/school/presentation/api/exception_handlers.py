"""Centralized exception handlers for the FastAPI application.

Every error leaves the API in the same shape:

    {
        "message": "Human-readable error message"
    }

Request validation errors additionally list the offending fields and are
reported as 400 rather than FastAPI's default 422.

Usage:
    from school.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

INVALID_INPUT_MESSAGE = "Invalid input"
INTERNAL_ERROR_MESSAGE = "Internal server error"


def _create_error_response(
    status_code: int,
    message: str,
    headers: dict[str, str] | None = None,
    **extra: object,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={"message": message, **extra},
        headers=headers,
    )


def _field_name(loc: tuple) -> str:
    # loc looks like ("body", "email") - drop the request part
    parts = [str(p) for p in loc[1:]] or [str(p) for p in loc]
    return ".".join(parts)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> JSONResponse:
        """Render HTTP errors raised by routers and dependencies."""
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Request failed on %s %s: %s",
                request.method,
                request.url.path,
                exc.detail,
            )
        return _create_error_response(
            status_code=exc.status_code,
            message=str(exc.detail),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Report malformed request bodies as 400 Invalid input."""
        fields = sorted({_field_name(tuple(err.get("loc", ()))) for err in exc.errors()})
        logger.info(
            "Validation failed on %s %s: %s",
            request.method,
            request.url.path,
            ", ".join(fields),
        )
        return _create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=INVALID_INPUT_MESSAGE,
            fields=fields,
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Last resort: log everything, reveal nothing."""
        logger.exception(
            "Unhandled error on %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message=INTERNAL_ERROR_MESSAGE,
        )
