# sitepulse/main.py

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.openapi.utils import get_openapi

from sitepulse.adapters.configuration.config import Settings, settings as default_settings
from sitepulse.adapters.outbound.persistence.database import Database
from sitepulse.adapters.outbound.persistence.repositories.token_repository import token_repository
from sitepulse.adapters.outbound.persistence.seeds import run_all_seeds
from sitepulse.adapters.outbound.security.auth_client_manager import ClientAuthManager
from sitepulse.application.use_cases.base_use_cases import utcnow

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    level = logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )


# ── EXPIRED TOKEN CLEANUP TASK ────────────────────────────────────────────────
async def cleanup_expired_tokens(database: Database) -> int:
    """Deletes tokens whose expiry has passed."""
    async with database.session() as db:
        deleted = await token_repository.cleanup_expired(db, utcnow())
    if deleted:
        logger.info(f"Cleaned up {deleted} expired access tokens")
    return deleted


async def periodic_cleanup(database: Database, interval_seconds: int):
    """Background task that periodically removes expired tokens."""
    while True:
        try:
            await asyncio.sleep(interval_seconds)
            await cleanup_expired_tokens(database)
        except asyncio.CancelledError:
            logger.info("Token cleanup task cancelled")
            break
        except Exception as e:
            logger.exception(f"Error in cleanup_expired_tokens: {e}")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Explicit settings; the environment-derived ones by default
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Startup: connect, create tables, seed, start the cleanup task.
        Shutdown: stop the task and close the connection pool.
        """
        logger.info("Application starting up...")

        database = Database.from_settings(settings)
        app.state.database = database
        await database.create_all()
        await run_all_seeds(database, settings, app.state.auth_manager)

        app.state.cleanup_task = asyncio.create_task(
            periodic_cleanup(database, settings.TOKEN_CLEANUP_INTERVAL_SECONDS)
        )

        yield

        logger.info("Application shutting down...")
        app.state.cleanup_task.cancel()
        try:
            await app.state.cleanup_task
        except asyncio.CancelledError:
            pass
        await database.dispose()

    app = FastAPI(
        title="SitePulse",
        description="Web analytics ingestion API",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.auth_manager = ClientAuthManager.from_settings(settings)

    # Middlewares
    from sitepulse.shared.middleware import (
        AsyncExceptionMiddleware,
        AsyncRequestLoggingMiddleware,
        register_exception_handlers,
    )

    register_exception_handlers(app)
    app.add_middleware(AsyncRequestLoggingMiddleware, settings=settings)
    app.add_middleware(AsyncExceptionMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    from sitepulse.adapters.inbound.api.v1.router import api_router, auth_router

    app.include_router(auth_router)
    app.include_router(api_router, prefix="/api")

    @app.get("/health", include_in_schema=False)
    async def health():
        return {"status": "ok"}

    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        spec = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )

        # Validation failures are reported as 400, not 422
        for schema in ("HTTPValidationError", "ValidationError"):
            spec.get("components", {}).get("schemas", {}).pop(schema, None)

        for path in spec.get("paths", {}).values():
            for op in path.values():
                op.get("responses", {}).pop("422", None)

        app.openapi_schema = spec
        return spec

    app.openapi = custom_openapi
    return app


configure_logging(default_settings)
app = create_app()
