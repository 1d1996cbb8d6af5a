"""Global exception handlers — translate domain errors to HTTP responses.

Each domain exception maps to a specific HTTP status code and the
standard ``{"status": "error", "message": "..."}`` envelope.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from theme_converter.domain.exceptions import (
    ConversionCancelledError,
    FetchExhaustedError,
    InvalidReferenceError,
    RateLimitedError,
    RepositoryAccessDeniedError,
    RepositoryNotFoundError,
    ThemeConverterError,
)
from theme_converter.interface.schemas import ErrorResponse

logger = logging.getLogger(__name__)

# Starlette picks the handler registered for the closest class in the MRO,
# so subclasses such as RepositoryNotFoundError keep their own status.
_EXCEPTION_STATUS: list[tuple[type[ThemeConverterError], int, str]] = [
    (InvalidReferenceError, 422, "Invalid repository reference"),
    (RepositoryNotFoundError, 404, "Repository not found"),
    (RepositoryAccessDeniedError, 403, "Repository is private or blocked"),
    (RateLimitedError, 429, "GitHub API rate limit exceeded"),
    (FetchExhaustedError, 502, "GitHub API kept failing"),
    (ConversionCancelledError, 499, "Conversion cancelled"),
    (ThemeConverterError, 500, "Conversion failed"),
]


def error_responses() -> dict[int | str, dict[str, object]]:
    """OpenAPI ``responses`` entries documenting every mapped domain error."""
    return {
        code: {"model": ErrorResponse, "description": description}
        for _, code, description in _EXCEPTION_STATUS
    }


def _error_json(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"status": "error", "message": message},
    )


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application."""

    # ── Domain exceptions ───────────────────────────────────────────────

    for exc_type, code, _ in _EXCEPTION_STATUS:

        def _make_handler(
            status_code: int,
        ):  # type: ignore[no-untyped-def]
            async def handler(request: Request, exc: Exception) -> JSONResponse:
                logger.warning("%s: %s", type(exc).__name__, exc)
                return _error_json(status_code, str(exc))

            return handler

        app.add_exception_handler(exc_type, _make_handler(code))

    # ── Pydantic / FastAPI validation errors ────────────────────────────

    @app.exception_handler(RequestValidationError)
    async def validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        messages = []
        for err in exc.errors():
            loc = " → ".join(str(p) for p in err.get("loc", []))
            messages.append(f"{loc}: {err.get('msg', 'validation error')}")
        return _error_json(422, "; ".join(messages))

    # ── Catch-all for unexpected errors ─────────────────────────────────

    @app.exception_handler(Exception)
    async def generic_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception")
        return _error_json(500, "An unexpected error occurred. Please try again later.")
