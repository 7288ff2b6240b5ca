"""
Main application entry point for Studio Tracker.

Initializes the FastAPI application, configures CORS and error handling,
and mounts every API router under the versioned prefix.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.core.config import settings
from app.core.database import DatabaseManager, SessionLocal, init_db, check_database_connection
from app.core.logging_config import setup_logging
from app.core.timeutils import now_ms
from app.exception_handlers import setup_exception_handlers
from app.routers import api_router

# Initialize logging
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Create tables and seed data on startup.
    """
    logger.info(f"Starting up {settings.PROJECT_NAME} {settings.VERSION}...")
    DatabaseManager.create_all_tables()
    with SessionLocal() as db:
        init_db(db)
    logger.info("Database initialized successfully")

    yield

    logger.info(f"Shutting down {settings.PROJECT_NAME}...")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description=settings.DESCRIPTION,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    docs_url=f"{settings.API_V1_STR}/docs",
    redoc_url=f"{settings.API_V1_STR}/redoc",
    lifespan=lifespan,
)

# Without configured origins: any origin, no credentials
cors_origins = [str(origin).rstrip("/") for origin in settings.BACKEND_CORS_ORIGINS]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins or ["*"],
    allow_credentials=bool(cors_origins),
    allow_methods=["*"],
    allow_headers=["*"],
)

setup_exception_handlers(app)


@app.get(f"{settings.API_V1_STR}/health", tags=["health"])
async def health_check() -> dict:
    """Liveness probe with a database check."""
    return {
        "status": "ok",
        "database": "ok" if check_database_connection() else "unavailable",
        "timestamp": now_ms(),
    }


app.include_router(api_router, prefix=settings.API_V1_STR)
