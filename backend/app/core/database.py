"""Database configuration and session management.

This module constructs an asynchronous SQLAlchemy engine and session
factory for the application.  ``DATABASE_URL`` is normalised for async
drivers: Postgres URLs are routed through ``psycopg`` with TLS required,
SQLite URLs through ``aiosqlite``.  When no URL is configured a local
SQLite database may be used in development if ``DB_DEV_FALLBACK_SQLITE``
is enabled; otherwise import fails fast.
"""

from __future__ import annotations

import logging
import os
from typing import Any, AsyncGenerator

from sqlalchemy.engine.url import make_url
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from app.core.config import settings

logger = logging.getLogger(__name__)

SQLITE_FALLBACK_URL = "sqlite+aiosqlite:///./app.db"


def resolve_database_url(raw_url: str | None) -> str:
    """Return an async-driver URL for ``raw_url``.

    Postgres variants are normalised to ``postgresql+psycopg`` with
    ``sslmode=require`` unless explicitly set.  Plain ``sqlite`` is
    upgraded to ``sqlite+aiosqlite``.
    """
    if not raw_url:
        if not settings.DB_DEV_FALLBACK_SQLITE:
            raise RuntimeError(
                "No database URL provided via DATABASE_URL; with "
                "DB_DEV_FALLBACK_SQLITE=false, a Postgres URL is required."
            )
        return SQLITE_FALLBACK_URL

    url_obj = make_url(raw_url)
    driver = url_obj.drivername or ""
    if driver == "sqlite":
        return url_obj.set(drivername="sqlite+aiosqlite").render_as_string(hide_password=False)
    if driver in {"postgresql", "postgres", "postgresql+psycopg2", "postgresql+asyncpg"}:
        q = dict(url_obj.query or {})
        # Always require SSL unless explicitly disabled
        if not q.get("sslmode"):
            q["sslmode"] = "require"
        url_obj = url_obj.set(drivername="postgresql+psycopg", query=q)
        return url_obj.render_as_string(hide_password=False)
    return raw_url


db_url = resolve_database_url(settings.DATABASE_URL or os.getenv("DATABASE_URL"))

engine_kwargs: dict[str, Any] = dict(echo=False, pool_pre_ping=True)

# Log the selected URL for debugging without leaking the password.
logger.info("Creating async engine with URL: %s", make_url(db_url).render_as_string(hide_password=True))
engine = create_async_engine(db_url, **engine_kwargs)

# Create session factory
AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

# Declarative base
Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency that yields a database session.

    Each session is scoped to the request and closed after use.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db() -> None:
    """Create all tables declared on ``Base``.

    Typically called during application startup in development; production
    schemas are managed with Alembic.
    """
    async with engine.begin() as conn:
        # Import all models to ensure metadata is populated
        from app.models import tables  # noqa: F401
        await conn.run_sync(Base.metadata.create_all)
