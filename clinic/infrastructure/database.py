from typing import AsyncGenerator
import logging

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from clinic.core.config import settings

logger = logging.getLogger(__name__)

# Base model
Base = declarative_base()


def is_sqlite_url(url: str) -> bool:
    return url.lower().startswith("sqlite")


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """SQLite ignores REFERENCES clauses unless the pragma is on per connection"""

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, echo: bool = False, **kwargs) -> AsyncEngine:
    """Create the async engine for either backend"""
    if is_sqlite_url(url):
        engine = create_async_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False},
            **kwargs
        )
        enable_sqlite_foreign_keys(engine)
    else:
        engine = create_async_engine(
            url,
            pool_pre_ping=True,
            pool_recycle=3600,
            echo=echo,
            **kwargs
        )
    return engine


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency to get database session"""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db(bind: AsyncEngine = engine) -> None:
    """Initialize database tables"""
    # Register the mappers on Base.metadata
    import clinic.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"Database tables ensured on {bind.url.get_backend_name()}")


async def close_db(bind: AsyncEngine = engine) -> None:
    """Close database connections"""
    await bind.dispose()


def enum_values(enum_cls) -> list:
    """Persist enum members by value ("male"), not by name ("MALE")"""
    return [member.value for member in enum_cls]
