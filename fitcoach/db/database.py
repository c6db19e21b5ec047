"""Database engine and session management."""
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from fitcoach.config.settings import get_settings
from fitcoach.core.logging import get_logger

logger = get_logger(__name__)

settings = get_settings()


class Base(DeclarativeBase):
    """Base class for all database models."""
    pass


def create_engine(url: str | None = None) -> AsyncEngine:
    """Create an async engine for the configured database.

    SQLite URLs skip the connection-pool sizing options, which only apply to
    server databases.
    """
    url = url or settings.database_url
    options: dict = {
        "echo": settings.db_echo,
        "future": True,
        "pool_pre_ping": True,
    }
    if not url.startswith("sqlite"):
        options.update(
            pool_size=20,
            max_overflow=20,
            pool_timeout=30,
            pool_recycle=settings.db_pool_recycle,
        )
    return create_async_engine(url, **options)


def create_session_maker(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind, class_=AsyncSession, expire_on_commit=False)


# Primary engine and session maker
engine = create_engine()
async_session_maker = create_session_maker(engine)


async def init_db(bind: AsyncEngine | None = None) -> None:
    """Create all tables on the given engine (primary engine by default)."""
    # Register models on Base.metadata
    import fitcoach.models  # noqa: F401

    bind = bind or engine

    if bind.url.get_backend_name() == "sqlite":
        async with bind.connect() as conn:
            await conn.execute(text("PRAGMA journal_mode=WAL"))
            await conn.execute(text("PRAGMA busy_timeout=30000"))
            await conn.commit()

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    logger.info("database_initialized", backend=bind.url.get_backend_name())


async def close_all_engines() -> None:
    """Dispose of the primary engine's connection pool."""
    await engine.dispose()
