"""Main application entry point for the DJ Requests service."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI, Request

from catalog.router import router as catalog_router
from config.settings import get_settings
from core.dependencies import (
    close_catalog_service,
    close_form_service,
    flush_posthog,
    shutdown_posthog,
)
from core.logging import setup_logging
from core.sentry import init_sentry
from playlist.router import router as playlist_router
from routers.health import router as health_router
from submission.router import router as submission_router

load_dotenv()

settings = get_settings()

init_sentry(
    dsn=settings.sentry_dsn,
    environment="production" if settings.log_level != "DEBUG" else "development",
    release=settings.app_version,
)

log_file = None
if settings.log_level != "DEBUG":
    log_dir = Path("/app/logs") if Path("/app/logs").exists() else Path("logs")
    log_file = log_dir / "dj-requests.log"
setup_logging(level=settings.log_level, log_file=log_file)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan with proper startup and shutdown."""
    logger.info(f"Starting {settings.app_name} v{settings.app_version}")
    logger.info(f"Log level: {settings.log_level}")
    logger.info(
        f"Google Form: {'configured' if settings.resolved_google_form_url else 'not configured'}"
    )

    yield

    logger.info("Shutting down application")
    shutdown_posthog()
    await close_catalog_service()
    await close_form_service()
    logger.info("All services shut down")


app = FastAPI(
    title=settings.app_name,
    description="Song search and DJ request submission",
    version=settings.app_version,
    lifespan=lifespan,
)


@app.middleware("http")
async def posthog_flush_middleware(request: Request, call_next):
    """Flush PostHog events after each request to prevent data loss."""
    response = await call_next(request)
    flush_posthog()
    return response


app.include_router(health_router, prefix="", tags=["health"])
app.include_router(catalog_router, prefix="/api/v1", tags=["catalog"])
app.include_router(submission_router, prefix="/api/v1", tags=["request"])
app.include_router(playlist_router, prefix="/api/v1", tags=["playlist"])

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
