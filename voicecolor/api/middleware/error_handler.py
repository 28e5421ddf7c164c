"""
Global error handling middleware for the FastAPI application.

Catches VoiceColorError subclasses, Pydantic validation errors, and
unhandled exceptions, converting them into a consistent JSON envelope.
Upstream Gemini failures are the exception: they are relayed as plain text
with the upstream status code.
"""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from voicecolor.core.exceptions import UpstreamAPIError, VoiceColorError
from voicecolor.core.models import ErrorResponse

logger = logging.getLogger(__name__)


def _envelope(
    status_code: int, detail: str, code: str, timestamp: str | None = None
) -> JSONResponse:
    body = ErrorResponse(
        detail=detail, code=code, timestamp=timestamp or datetime.now(UTC).isoformat()
    )
    return JSONResponse(status_code=status_code, content=body.model_dump())


def register_error_handlers(app: FastAPI) -> None:
    """Attach exception handlers to the FastAPI application.

    Registers four handlers:
    1. ``UpstreamAPIError``: upstream status and body passed through.
    2. ``VoiceColorError``: maps domain errors to structured JSON responses.
    3. ``RequestValidationError``: Pydantic validation failures (422).
    4. ``Exception``: catch-all for unexpected server errors (500).

    Args:
        app: The FastAPI application instance to register handlers on.
    """

    @app.exception_handler(UpstreamAPIError)
    async def upstream_error_handler(_request: Request, exc: UpstreamAPIError) -> PlainTextResponse:
        """Relay the upstream failure verbatim."""
        return PlainTextResponse(exc.detail, status_code=exc.status_code)

    @app.exception_handler(VoiceColorError)
    async def voicecolor_error_handler(_request: Request, exc: VoiceColorError) -> JSONResponse:
        """Convert domain-specific errors into a JSON error envelope."""
        if exc.status_code >= 500:
            logger.error("%s: %s", exc.code, exc.detail)
        return _envelope(exc.status_code, exc.detail, exc.code, exc.timestamp)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        _request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        """Handle Pydantic request validation errors (malformed body/params)."""
        return _envelope(422, str(exc), "VALIDATION_ERROR")

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Catch-all handler; prevents stack traces from leaking to clients."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return _envelope(500, "Internal server error", "INTERNAL_ERROR")
