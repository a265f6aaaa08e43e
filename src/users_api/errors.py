"""Error translation — maps failures to HTTP responses."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from users_api.config import settings

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


def field_error(field: str, message: str, location: str = "body") -> RequestValidationError:
    """Build a validation error for a check done inside a handler."""
    return RequestValidationError(
        [{"loc": (location, field), "msg": message, "type": "value_error"}]
    )


def build_field_errors(errors: Iterable[dict[str, Any]]) -> list[dict[str, str]]:
    """Flatten Pydantic errors into ``{field, message, location}`` dicts."""
    flattened = []
    for e in errors:
        loc = [str(part) for part in e.get("loc", ())]
        location = loc[0] if loc else "body"
        flattened.append(
            {
                "field": ".".join(loc[1:]) or location,
                "message": e["msg"],
                "location": location,
            }
        )
    return flattened


def not_found_response(message: str = "Unknown user") -> PlainTextResponse:
    return PlainTextResponse(message, status_code=404)


def internal_error_response(exc: BaseException) -> PlainTextResponse:
    """Log *exc* and turn it into a 500 plain-text response.

    The raw error message is only sent to the client when
    ``settings.expose_error_details`` is enabled.
    """
    logger.error("Store operation failed: %s", exc, exc_info=exc)
    body = str(exc) if settings.expose_error_details else GENERIC_ERROR_MESSAGE
    return PlainTextResponse(body, status_code=500)


def register_error_handlers(app: FastAPI) -> None:
    """Register the global error handlers on the FastAPI app."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = build_field_errors(exc.errors())
        logger.info(
            "Validation failed on %s: %s",
            request.url.path,
            ", ".join(f"{e['field']} ({e['message']})" for e in errors),
        )
        return JSONResponse(status_code=400, content={"errors": errors})

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(
        request: Request, exc: SQLAlchemyError
    ) -> PlainTextResponse:
        logger.warning("Unhandled store error on %s", request.url.path)
        return internal_error_response(exc)

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> PlainTextResponse:
        """Catch-all for anything the handlers did not translate."""
        logger.warning("Unhandled exception on %s", request.url.path)
        return internal_error_response(exc)
