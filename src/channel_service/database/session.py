from typing import AsyncGenerator
from fastapi import Request
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from channel_service.config.settings import Settings


def build_engine(settings: Settings, url: str | None = None) -> AsyncEngine:
    """
    Create the AsyncEngine (and with it the connection pool) for `settings`.

    The engine is owned by the application that creates it (see main.create_app),
    which keeps it on `app.state` and disposes it on shutdown. Nothing in this
    module holds an engine at import time.

    Args:
        settings: validated application settings (pool sizing, echo, URL).
        url: optional URL overriding `settings.DATABASE_URL` (used by tests).
    """
    database_url = url or settings.DATABASE_URL

    engine_kwargs: dict = {
        "echo": settings.SQLALCHEMY_ECHO,
        "pool_pre_ping": settings.DB_POOL_PRE_PING,   # connection health checks on checkout
    }

    # SQLite (local runs / tests) may use a StaticPool, which rejects sizing arguments.
    if make_url(database_url).get_backend_name() != "sqlite":
        engine_kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )

    return create_async_engine(database_url, **engine_kwargs)


def build_session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # expire_on_commit=False: rows read before a commit stay usable afterwards
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields one session per request and always closes it.

    The session maker is read from `request.app.state`, where the application
    factory placed it, so handlers never reach for a module-level pool.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    session_maker: async_sessionmaker[AsyncSession] = request.app.state.session_maker
    async with session_maker() as session:
        yield session
