"""Database engine and session management."""

from typing import Any, AsyncGenerator

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from core.config import Settings, settings


def build_engine(config: Settings) -> AsyncEngine:
    """Create the async engine for the configured database.

    Pool sizing only applies to server databases; SQLite uses its own pool.
    """
    url = make_url(config.async_database_url)
    options: dict[str, Any] = {"echo": config.database_echo}
    if url.get_backend_name() != "sqlite":
        options.update(
            pool_pre_ping=True,
            pool_size=config.database_pool_size,
            max_overflow=config.database_max_overflow,
        )
    return create_async_engine(url, **options)


engine = build_engine(settings)

# Objects stay usable after commit; services return them to the API layer
async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency yielding a session for ad-hoc queries (health checks)."""
    async with async_session_factory() as session:
        yield session
