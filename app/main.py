# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Melodia API.
# create_app() wires middleware, routers, error handlers and the frontend
# bundle from an explicit Settings object; the module-level `app` uses the
# environment.
#
# Usage:
#   uvicorn app.main:app --reload
#   melodia-api            # console script, reads PORT / NODE_ENV
# =============================================================================

import asyncio
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.concurrency import run_in_threadpool

from app.auth import AuthContextMiddleware
from app.config import Settings, get_settings
from app.exceptions import register_exception_handlers
from app.frontend import mount_frontend
from app.middleware.uploads import UploadMiddleware
from app.routers import HEALTH_PREFIX, ROUTE_GROUPS, health
from core.services.scheduler import CleanupScheduler
from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)

VERSION = "1.0.0"


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.DEBUG else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


async def connect_database() -> None:
    """Open the database connection; a failure is logged, not fatal."""
    try:
        await run_in_threadpool(SupabaseClient.connect)
    except SupabaseClientError as e:
        logger.error(f"Database connection failed: {e}")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Runs on startup and shutdown:
    - Startup: Create the temp directory, start the hourly cleanup,
      kick off the database connection in the background
    - Shutdown: Stop the cleanup task, cancel a pending connection attempt
    """
    settings: Settings = app.state.settings

    # Startup
    logger.info(f"Starting Melodia API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    settings.TEMP_DIR.mkdir(parents=True, exist_ok=True)

    scheduler = None
    if settings.TEMP_CLEANUP_ENABLED:
        scheduler = CleanupScheduler(settings.TEMP_DIR, minute=settings.TEMP_CLEANUP_MINUTE)
        scheduler.start()
    app.state.cleanup_scheduler = scheduler

    connect_task = asyncio.create_task(connect_database())

    yield

    # Shutdown
    logger.info("Shutting down Melodia API")

    if scheduler:
        await scheduler.stop()

    if not connect_task.done():
        connect_task.cancel()
        try:
            await connect_task
        except asyncio.CancelledError:
            pass


def create_app(settings: Settings | None = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration to use; defaults to the cached environment settings

    Returns:
        FastAPI: The configured application
    """
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Melodia API",
        description="Backend for the Melodia music-streaming app.",
        version=VERSION,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "Users", "description": "Listener profiles"},
            {"name": "Admin", "description": "Catalog management (admin only)"},
            {"name": "Auth", "description": "Profile sync and token verification"},
            {"name": "Songs", "description": "Song catalog"},
            {"name": "Albums", "description": "Album catalog"},
            {"name": "Stats", "description": "Dashboard totals (admin only)"},
            {"name": "Health", "description": "API health and readiness checks"},
        ],
    )
    app.state.settings = settings

    # =========================================================================
    # Middleware
    # =========================================================================
    # Starlette runs the most recently added middleware first, so requests
    # pass through: CORS -> catch-all -> auth context -> upload staging -> router.

    app.add_middleware(
        UploadMiddleware,
        temp_dir=settings.TEMP_DIR,
        max_file_size=settings.UPLOAD_MAX_FILE_SIZE,
        max_files=settings.UPLOAD_MAX_FILES,
        max_request_size=settings.max_request_size,
        use_temp_files=settings.UPLOAD_USE_TEMP_FILES,
        create_parent_path=settings.UPLOAD_CREATE_PARENT_PATH,
    )

    app.add_middleware(AuthContextMiddleware, settings=settings)

    # Typed errors plus the catch-all middleware; CORS must wrap the latter
    register_exception_handlers(app, production=settings.is_production)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =========================================================================
    # Routers
    # =========================================================================

    for prefix, router, tag in ROUTE_GROUPS:
        app.include_router(router, prefix=prefix, tags=[tag])

    app.include_router(health.router, prefix=HEALTH_PREFIX, tags=["Health"])

    # Single-page app fallback; must come after every API router
    if settings.is_production:
        mount_frontend(app, settings.FRONTEND_DIST_DIR)

    return app


app = create_app()


class MelodiaServer(uvicorn.Server):
    """uvicorn server that announces the port once the socket is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            logger.info(f"Server is running on port {self.config.port}")


def run() -> None:
    """Console script entry point."""
    settings = get_settings()
    config = uvicorn.Config(app, host=settings.API_HOST, port=settings.PORT)
    MelodiaServer(config).run()


if __name__ == "__main__":
    run()
