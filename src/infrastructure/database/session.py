"""Engine and session factory for the profile store."""

from typing import Any, AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from core.config import settings

POOLER_MARKERS = ("pooler.", "pgbouncer")


def pooler_connect_args(database_url: str) -> dict[str, Any]:
    """asyncpg options for ``database_url``.

    Transaction-mode poolers cannot keep prepared statements between
    transactions, so the statement cache is turned off behind one.
    """
    if any(marker in database_url for marker in POOLER_MARKERS):
        return {"statement_cache_size": 0}
    return {}


engine = create_async_engine(
    settings.async_database_url,
    echo=settings.debug,
    pool_pre_ping=True,
    connect_args=pooler_connect_args(settings.database_url),
)

async_session_factory = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Session for request handlers that talk to the store directly (health probe)."""
    async with async_session_factory() as session:
        yield session
