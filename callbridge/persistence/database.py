"""Engine and session factory for the callbridge PostgreSQL store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from callbridge.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg-backed engine.

    Pool size and overflow come from ``settings.database``; SQL echo
    follows ``settings.debug``.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create the per-request session factory.

    Repositories flush through ``begin_nested`` savepoints themselves, and
    entities are frozen pydantic models rather than ORM objects, so sessions
    neither autoflush nor expire on commit.
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )
