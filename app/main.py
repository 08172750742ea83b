from __future__ import annotations

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.router import router as api_v1_router
from app.config.logging import get_logger, setup_logging
from app.config.settings import settings
from app.core.middleware import RequestLoggingMiddleware, register_exception_handlers
from app.db.init_db import init_db

logger = get_logger(__name__)


def create_app() -> FastAPI:
    """
    Application factory for the FastAPI app.

    - Configures logging, title, version, debug mode from Settings.
    - Registers CORS, request logging middleware, and exception handlers.
    - Includes the versioned API router under settings.API_PREFIX.
    """
    setup_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        debug=settings.DEBUG,
        version=settings.API_VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    # CORS Configuration
    origins = settings.get_cors_origins()
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials="*" not in origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Correlation ID, timing and access log
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(api_v1_router, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["Health"])
    def health() -> dict:
        return {"status": "ok", "version": settings.API_VERSION}

    # Schema creation in dev/test only; production schemas are migrated
    @app.on_event("startup")
    def on_startup() -> None:
        if not settings.is_production() and settings.AUTO_CREATE_TABLES:
            init_db()
        logger.info(f"{settings.APP_NAME} {settings.API_VERSION} started ({settings.ENVIRONMENT})")

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,
    )
