"""Async SQLAlchemy engine and session factory for the ingest database."""

from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from knowledge_ingest.config import get_settings


def to_async_url(url: str) -> str:
    """Swap a sync driver URL for its async counterpart (asyncpg / aiosqlite)."""
    if url.startswith("sqlite:///"):
        return url.replace("sqlite:///", "sqlite+aiosqlite:///", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


settings = get_settings()

# SQL echo is controlled through the "sqlalchemy.engine" logger level (LOG_LEVEL_SQL).
engine = create_async_engine(to_async_url(settings.database_url), future=True)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, committed on success."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
