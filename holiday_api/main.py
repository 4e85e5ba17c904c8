# holiday_api/main.py
"""
FastAPI application entry point.
"""

import os
import sys
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from holiday_api.core.config import (
    HOLIDAY_CATALOG_PATH,
    HOLIDAY_MAX_YEAR,
    HOLIDAY_MIN_YEAR,
    IS_PRODUCTION,
    SERVICE_NAME,
    SERVICE_VERSION,
)
from holiday_api.core.logging_config import get_logger, setup_logging
from holiday_api.core.request_logging import RequestLoggingMiddleware
from holiday_api.core.sentry_config import init_sentry
from holiday_api.core.storage import load_holiday_definitions
from holiday_api.database.database import Holiday, SessionLocal, create_tables, get_db, seed_catalog
from holiday_api.routes.holidays import router as holidays_router

setup_logging()
logger = get_logger(__name__)

sentry_enabled = init_sentry()


def seed_default_catalog() -> int:
    """
    Load the default catalog file and insert it into an empty database.

    Raises:
        StorageError: If the catalog file is missing or invalid
    """
    definitions = load_holiday_definitions(HOLIDAY_CATALOG_PATH)
    with SessionLocal() as db:
        return seed_catalog(db, definitions)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables and seed the catalog on startup."""
    logger.info(
        "Application starting up",
        extra={
            "extra_fields": {
                "production": IS_PRODUCTION,
                "python_version": sys.version,
                "year_range": [HOLIDAY_MIN_YEAR, HOLIDAY_MAX_YEAR],
            }
        },
    )

    try:
        create_tables()
        logger.info("Database tables created/verified")
    except Exception as e:
        logger.error(f"Failed to create database tables: {e}", exc_info=True)
        raise

    try:
        seed_default_catalog()
    except Exception as e:
        logger.error(f"Holiday catalog seeding failed: {e}", exc_info=True)
        raise

    yield

    logger.info("Application shutting down")


def cors_settings(production: bool, origins_env: str) -> tuple[list[str], list[str]]:
    """
    Allowed (origins, methods) for CORS.

    Production accepts only the comma-separated CORS_ORIGINS and GET.
    Development accepts anything.
    """
    if not production:
        return ["*"], ["*"]

    origins = [origin.strip() for origin in origins_env.split(",") if origin.strip()]
    if not origins:
        logger.warning("Production mode but no CORS_ORIGINS set. Cross-origin requests will be blocked.")
    return origins, ["GET"]


app = FastAPI(
    title="Holiday API",
    description="Holiday verification and yearly holiday listings",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)

allowed_origins, allowed_methods = cors_settings(IS_PRODUCTION, os.getenv("CORS_ORIGINS", ""))
logger.info(f"CORS origins: {allowed_origins}, methods: {allowed_methods}")

app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins,
    allow_credentials=False,
    allow_methods=allowed_methods,
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)
app.add_middleware(RequestLoggingMiddleware)
app.include_router(holidays_router)


@app.get("/health", tags=["health"])
async def health_check(db: Session = Depends(get_db)):
    """200 with the catalog size while the database answers, 503 otherwise."""
    try:
        holiday_count = db.query(Holiday).count()
    except SQLAlchemyError as e:
        logger.error(f"Health check failed, holiday catalog unreachable: {e}", exc_info=True)
        raise HTTPException(
            status_code=503,
            detail={"status": "unhealthy", "service": SERVICE_NAME, "database": "disconnected"},
        ) from e

    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "database": "connected",
        "holidays": holiday_count,
    }
