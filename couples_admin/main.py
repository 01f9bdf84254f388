"""
FastAPI application setup for the admin panel.
"""

from fastapi import FastAPI, Request
import logging
import time
import uuid
from contextlib import asynccontextmanager

from couples_admin.config import get_settings
from couples_admin.core.db import init_db
from couples_admin.core.error_handlers import setup_error_handlers
from couples_admin.core.logging import configure_logging

settings = get_settings()

configure_logging(settings.log_level.value, settings.log_format, settings.log_file)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.
    Creates missing tables on startup.
    """
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    try:
        init_db()
        logger.info("Application startup complete")
    except Exception as e:
        logger.error(f"Application startup failed: {e}", exc_info=True)
        raise

    yield

    logger.info("Application shutdown complete")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan
    )

    setup_error_handlers(app)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log requests and responses with timing information."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        logger.info(
            f"Request {request_id} started: {request.method} {request.url.path}",
            extra={
                'request_id': request_id,
                'method': request.method,
                'path': request.url.path,
                'client_ip': request.client.host if request.client else 'unknown'
            }
        )

        response = await call_next(request)

        processing_time = (time.time() - start_time) * 1000

        logger.info(
            f"Request {request_id} completed: {response.status_code} ({processing_time:.2f}ms)",
            extra={
                'request_id': request_id,
                'status_code': response.status_code,
                'processing_time_ms': processing_time
            }
        )

        return response

    from couples_admin.api import (
        questions_router,
        categories_router,
        languages_router,
        health_router,
    )
    app.include_router(questions_router)
    app.include_router(categories_router)
    app.include_router(languages_router)
    app.include_router(health_router)

    return app


# Create application instance
app = create_app()
