"""FastAPI application entry point."""

import logging
import os

# Configure logging based on ENV environment variable
# ENV=dev: INFO level with detailed format (default)
# ENV=prod/staging: WARNING level, minimal logs
_env = os.getenv("ENV", "dev").lower()
_is_dev = _env == "dev"
_log_level = logging.INFO if _is_dev else logging.WARNING

logging.basicConfig(
    level=_log_level,
    format=(
        "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
        if _is_dev
        else "%(levelname)s | %(message)s"
    ),
    datefmt="%H:%M:%S",
)

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from resource_hub.api import auth, health, resources, users
from resource_hub.config import settings
from resource_hub.core.exceptions import AppError
from resource_hub.middleware.exception_handlers import (
    app_error_handler,
    general_exception_handler,
    http_exception_handler,
    validation_exception_handler,
)
from resource_hub.middleware.request_logging import RequestLoggingMiddleware

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Learning Resource Hub API",
    description="Share, search, like, rate and bookmark learning resources",
    version=settings.APP_VERSION,
    docs_url="/api/docs",
    redoc_url="/api/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request logging and correlation id
app.add_middleware(RequestLoggingMiddleware)

# Register global exception handlers
app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, general_exception_handler)

app.include_router(health.router, prefix="/api", tags=["Health"])
app.include_router(auth.router, prefix="/api", tags=["Auth"])
app.include_router(resources.router, prefix="/api", tags=["Resources"])
app.include_router(users.router, prefix="/api", tags=["Users"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "success": True,
        "message": f"{settings.APP_NAME} API is running",
        "version": settings.APP_VERSION,
    }


@app.on_event("startup")
async def startup_event():
    """Application startup tasks."""
    # Ensure MongoDB indexes exist (unique email among them)
    try:
        from resource_hub.database.ensure_indexes import ensure_indexes
        from resource_hub.database.mongo import get_database

        ensure_indexes(get_database())
    except Exception as e:
        logger.warning(f"Failed to ensure database indexes: {e}")
