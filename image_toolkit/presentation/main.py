import os
import logging
from logging.handlers import RotatingFileHandler

from fastapi import FastAPI, APIRouter
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from contextlib import asynccontextmanager

from image_toolkit.core.middleware import RequestLoggingMiddleware
from image_toolkit.core.exceptions import (
    ImageProcessingError,
    general_exception_handler,
    http_exception_handler,
    image_processing_exception_handler,
    validation_exception_handler,
)
from image_toolkit.presentation.api.v1.routers import colors, config, health, images
from image_toolkit.core.config import settings


def _log_handlers():
    handlers = [logging.StreamHandler()]
    if settings.log_file:
        log_dir = os.path.dirname(settings.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                settings.log_file,
                maxBytes=5 * 1024 * 1024,
                backupCount=2,
                encoding="utf-8",
            )
        )
    return handlers


# Configure logging: both to console and to file
logging.basicConfig(
    level=getattr(logging, settings.log_level.upper()),
    format=settings.log_format,
    datefmt=settings.log_date_format,
    handlers=_log_handlers(),
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    logger.info("Starting Image Toolkit API (root=%s)...", os.path.abspath(settings.root))
    yield
    logger.info("Shutting down Image Toolkit API...")


def create_application() -> FastAPI:
    """Create and configure FastAPI application"""

    app = FastAPI(
        title=settings.api_title,
        description=settings.api_description,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(ImageProcessingError, image_processing_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # Include API routers under versioned prefix
    api_v1 = APIRouter(prefix="/api/v1")
    api_v1.include_router(images.router)
    api_v1.include_router(colors.router)
    api_v1.include_router(config.router)
    api_v1.include_router(health.router)
    app.include_router(api_v1)

    return app


# Create application instance
app = create_application()

if __name__ == "__main__":
    dev_mode = os.getenv("DEV_MODE", "true").lower() == "true"
    uvicorn.run(
        "image_toolkit.presentation.main:app",
        host=settings.host,
        port=settings.port,
        reload=dev_mode,
    )
