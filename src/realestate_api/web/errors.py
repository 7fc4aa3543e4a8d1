"""Render exceptions as response envelopes."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from realestate_api.errors import RealEstateError, RequestValidationFailed
from realestate_api.logging import get_logger
from realestate_api.schemas import ApiResponse

logger = get_logger(__name__)

# Leading loc segments that name where a value came from, not which field
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def format_validation_errors(errors: Iterable[Mapping[str, Any]]) -> list[str]:
    """Turn pydantic error dicts into ``"field: message"`` strings."""
    formatted: list[str] = []
    for error in errors:
        loc: Sequence[Any] = error.get("loc", ())
        parts = [str(p) for p in loc if str(p) not in _LOCATION_PREFIXES]
        field = ".".join(parts)
        msg = error.get("msg", "Invalid value")
        formatted.append(f"{field}: {msg}" if field else str(msg))
    return formatted


def envelope_response(status_code: int, message: str, errors: list[str] | None = None) -> JSONResponse:
    body = ApiResponse[None].fail(message, errors)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json", by_alias=True))


def register_exception_handlers(app: FastAPI) -> None:
    """Install handlers so every failure reaches the client as an envelope."""

    @app.exception_handler(RealEstateError)
    async def handle_realestate_error(request: Request, exc: RealEstateError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("request_failed", path=request.url.path, error=exc.message)
        return envelope_response(exc.status_code, exc.message, exc.errors)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        errors = format_validation_errors(exc.errors())
        logger.info("request_validation_failed", path=request.url.path, errors=errors)
        return envelope_response(
            RequestValidationFailed.status_code, RequestValidationFailed.default_message, errors
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.error("unhandled_exception", path=request.url.path, exc_info=exc)
        return envelope_response(500, "An internal server error occurred")
