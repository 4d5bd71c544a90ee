"""
Application entry point.

Creates the FastAPI application and wires together:
- the database engine / connection pool (kept on app.state)
- request-id middleware and logging configuration
- error handlers (centralized repository-error-to-HTTP mapping)
- routers

No business logic belongs here.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from channel_service.api.v1 import api_router
from channel_service.api.v1.error_handlers import register_exception_handlers
from channel_service.config.settings import Settings, get_settings
from channel_service.core.logging import RequestIDMiddleware, setup_logging
from channel_service.database.base import Base
from channel_service.database.session import build_engine, build_session_maker
from channel_service import models  # noqa: F401 – import to register models with Base.metadata
from channel_service.utils.logging import get_project_name, get_project_version

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Optionally create the schema on startup; always release the pool on shutdown."""
    settings: Settings = app.state.settings
    engine = app.state.engine

    if settings.CREATE_TABLES_ON_STARTUP:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables ensured", extra={"tables": sorted(Base.metadata.tables)})

    yield

    await engine.dispose()
    logger.info("Database engine disposed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    The engine (and its connection pool) is created here and handed to request
    handlers through `app.state`, never through a module-level global. Creating
    the engine does not open a connection; the first request does.

    Args:
        settings: explicit settings (tests); defaults to the cached environment settings.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=get_project_name(),
        version=get_project_version(),
        lifespan=lifespan,
    )

    engine = build_engine(settings)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_maker = build_session_maker(engine)

    app.add_middleware(RequestIDMiddleware)
    register_exception_handlers(app)
    app.include_router(api_router)

    logger.info("Application created", extra={"env": settings.ENV, "db_backend": engine.url.get_backend_name()})
    return app


def run() -> None:
    """Serve the application with uvicorn on APP_HOST:APP_PORT."""
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        log_config=None,   # keep the dictConfig installed by setup_logging
    )
