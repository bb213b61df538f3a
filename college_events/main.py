"""FastAPI application entry point for College Events API."""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from college_events import __version__
from college_events.auth import router as auth_router
from college_events.config import get_settings
from college_events.database import Database
from college_events.events import router as events_router
from college_events.exception_handlers import setup_exception_handlers
from college_events.logging_config import setup_logging
from college_events.schemas import HealthResponse

# Configure logging before creating logger
settings = get_settings()
setup_logging(settings)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Application lifespan context manager.

    Opens the database handle at startup and disposes it at shutdown.
    """
    # Startup
    database = Database(settings.database_url, echo=settings.debug)
    database.create_tables()
    app.state.database = database

    if not settings.jwt_secret:
        logger.warning("JWT_SECRET is not set; token endpoints will fail")

    logger.info(f"{settings.app_name} ready, uploads in {settings.upload_path}")

    yield

    # Shutdown
    database.dispose()


app = FastAPI(
    title=settings.app_name,
    description="REST backend for the college events application",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origin_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

setup_exception_handlers(app)

# Include routers
app.include_router(auth_router)
app.include_router(events_router)

# Uploaded images are served back by filename
settings.upload_path.mkdir(parents=True, exist_ok=True)
app.mount("/uploads", StaticFiles(directory=settings.upload_path), name="uploads")


@app.get("/health", response_model=HealthResponse, tags=["Health"])
def health_check() -> HealthResponse:
    """
    Health check endpoint.

    Returns service health status.
    """
    return HealthResponse(
        status="ok",
        service="college-events-api",
        version=__version__,
    )


@app.get("/", tags=["Root"])
def root() -> dict[str, str]:
    """Root endpoint."""
    return {
        "service": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run(
        "college_events.main:app",
        host="0.0.0.0",
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
