"""
FastAPI application factory.

``create_app()`` assembles the application with CORS, error handlers,
routers, and the health endpoint. The transcript store and STT provider
are passed in (or built from settings) and attached to ``app.state``.
The module-level ``app`` instance allows ``uvicorn echonote.api.app:app``.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from echonote import __version__
from echonote.api.middleware.error_handler import register_error_handlers
from echonote.api.routes import history, transcribe
from echonote.core.config import Settings, get_settings
from echonote.core.models import HealthResponse
from echonote.services.storage.database import Database
from echonote.services.transcription import BaseSTT, create_stt

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown lifecycle.

    Startup: open the transcript store (create tables if needed).
    Shutdown: release the STT client, then dispose the DB engine.
    """
    database: Database = app.state.database
    stt: BaseSTT = app.state.stt
    if not app.state.settings.deepgram_api_key:
        logger.warning("DEEPGRAM_API_KEY is not set; transcription requests will fail")
    await database.open()
    yield
    await stt.aclose()
    await database.close()


def create_app(
    database: Database | None = None,
    stt: BaseSTT | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build and return a fully configured FastAPI application.

    Args:
        database: Transcript store handle. Built from ``settings.database_url``
            if omitted; opened by the lifespan if not already open.
        stt: Speech-to-text provider. Built from ``settings.stt_provider`` if omitted.
        settings: Configuration override (defaults to ``get_settings()``).

    Returns:
        FastAPI: The configured application, ready for ``uvicorn``.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="EchoNote",
        description="Speech-to-text transcription with a personal transcript history.",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.database = database or Database(settings.database_url)
    app.state.stt = stt or create_stt(settings.stt_provider, settings=settings)

    # -- CORS --
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -- Error handlers --
    register_error_handlers(app)

    # -- Health check --
    @app.get("/", response_model=HealthResponse, tags=["system"])
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__, timestamp=datetime.now(UTC))

    # -- REST routes --
    app.include_router(transcribe.router)
    app.include_router(history.router)

    return app


app = create_app()
