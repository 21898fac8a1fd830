"""
Database engine configuration and session management.

SQLite through aiosqlite by default; any async SQLAlchemy URL works since the
store only needs one key-value table.
"""
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import NullPool

from docuflow.core import config


def build_engine(url: str) -> AsyncEngine:
    return create_async_engine(
        url,
        # NullPool for SQLite to avoid connection pool issues
        poolclass=NullPool if url.startswith("sqlite") else None,
        echo=False,
        future=True,
    )


def build_session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


# Default engine used by server.py and the scripts
engine = build_engine(config.DATABASE_URL)
AsyncSessionLocal = build_session_factory(engine)


@asynccontextmanager
async def session_scope(
    session_factory: async_sessionmaker[AsyncSession] = AsyncSessionLocal,
) -> AsyncGenerator[AsyncSession, None]:
    """
    Transactional scope: commits on success, rolls back on any error.

    Usage:
        async with session_scope(factory) as session:
            session.add(entry)
    """
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db(db_engine: AsyncEngine = engine):
    """
    Create the key-value table if it does not exist.
    Call this on application startup.
    """
    from docuflow.core.database.base import Base

    # Import models so they are registered with SQLAlchemy
    from docuflow.core.database.models import StoreEntry  # noqa: F401

    async with db_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
