"""
ClinScore API Main Application
==============================

FastAPI application entry point for the ClinScore REST API.

Features:
    - OpenAPI documentation at /docs
    - Health and score endpoints
    - CORS middleware for browser-based forms
    - Async lifespan management (score library loading)

Usage:
    # Development:
    uvicorn clinscore.api.main:app --reload

    # Production:
    uvicorn clinscore.api.main:app --host 0.0.0.0 --port 8000

Author: ClinScore Team
Version: 1.0.0
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from clinscore.config import settings
from clinscore.api.dependencies import ServiceContainer
from clinscore.api.routes import health_router, scores_router


# Configure structured logging
from clinscore.logging import setup_logging, get_logger, RequestLoggingMiddleware
setup_logging(
    level=settings.log_level,
    json_output=settings.log_json and not settings.debug,
    log_file=settings.log_file or None,
)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Loads the score library on startup and releases it on shutdown.
    """
    logger.info("Starting ClinScore API...")

    container = ServiceContainer.get_instance()
    await container.initialize()

    logger.info("ClinScore API started", scores_available=container.available)

    yield

    logger.info("Shutting down ClinScore API...")
    await container.shutdown()
    logger.info("ClinScore API shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title="ClinScore API",
        description=(
            "Clinical Score Calculation API\n\n"
            "Scores are declared in YAML files and calculated from form inputs:\n"
            "- Point-based scores (CHA2DS2-VA, HAS-BLED, STOP-BANG, ...)\n"
            "- Formula-based scores (CKD-EPI 2021 eGFR, KFRE)\n"
            "- English and German labels\n"
            "- JSON and CSV export"
        ),
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add structured request logging middleware
    app.add_middleware(RequestLoggingMiddleware)

    # Register routers
    app.include_router(health_router)
    app.include_router(scores_router)

    @app.get("/", tags=["Root"])
    async def root():
        """Root endpoint returning API info."""
        return {
            "service": settings.app_name,
            "version": settings.app_version,
            "description": "Clinical Score Calculation API",
            "docs": "/docs"
        }

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "clinscore.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug
    )
