"""
FastAPI application factory.

``create_app()`` assembles the application with CORS, error handlers,
routers, and the health endpoint. The module-level ``app`` instance
allows ``uvicorn voicecolor.api.app:app --reload``.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from voicecolor.api.middleware.error_handler import register_error_handlers
from voicecolor.api.routes import analyze, upload
from voicecolor.core.config import get_settings
from voicecolor.core.models import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Apply the configured log level and make sure the bucket exists."""
    settings = get_settings()
    logging.getLogger("voicecolor").setLevel(settings.log_level.upper())
    if settings.serve_bucket:
        Path(settings.bucket_dir).mkdir(parents=True, exist_ok=True)
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set; /analyze will fail")
    yield


def create_app() -> FastAPI:
    """Build and return a fully configured FastAPI application.

    Returns:
        FastAPI: The configured application, ready for ``uvicorn``.
    """

    app = FastAPI(
        title="VoiceColor",
        description="Relay that scores a voice clip on 12 color personality axes "
        "and hosts shared result snapshots.",
        version="0.1.0",
        lifespan=lifespan,
    )

    # -- CORS --
    settings = get_settings()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    @app.get("/health", response_model=HealthResponse, tags=["system"])
    async def health() -> HealthResponse:
        return HealthResponse(timestamp=datetime.now(UTC))

    # -- REST routes --
    app.include_router(analyze.router)
    app.include_router(upload.router)

    # -- Bucket (public snapshot URLs) --
    if settings.serve_bucket:
        app.mount(
            "/files",
            StaticFiles(directory=settings.bucket_dir, check_dir=False),
            name="files",
        )

    return app


app = create_app()
