"""FastAPI application for learning progress tracking."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from kotoba.config import Settings, configure_logging, get_settings
from kotoba.database import create_tables, dispose_engine, initialize_database
from kotoba.infrastructure.common.error_handlers import register_exception_handlers
from kotoba.infrastructure.learning.routers import course_progress, vocabulary_status

logger = structlog.get_logger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application."""
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        configure_logging(settings)
        initialize_database(settings)
        create_tables()
        logger.info(
            "application_started", project=settings.PROJECT_NAME, version=settings.VERSION
        )
        yield
        dispose_engine()
        logger.info("application_stopped")

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(course_progress.router, prefix=settings.API_V1_PREFIX)
    app.include_router(vocabulary_status.router, prefix=settings.API_V1_PREFIX)

    @app.get("/health")
    def health_check() -> dict[str, str]:
        """Liveness probe."""
        return {"status": "healthy"}

    return app


app = create_app()
