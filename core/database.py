"""
Recipe Service Database Configuration
Async database setup with SQLAlchemy 2.0
"""

from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool
from sqlalchemy import MetaData, text
from contextlib import asynccontextmanager
import structlog
from typing import Any, AsyncGenerator, Dict, Optional

from core.config import settings
from core.exceptions import RecipeServiceError, StorageUnavailableError

logger = structlog.get_logger()

# Database engine
engine: Optional[AsyncEngine] = None
async_session_factory: Optional[async_sessionmaker] = None


class Base(DeclarativeBase):
    """Base class for all database models"""

    metadata = MetaData(
        naming_convention={
            "ix": "ix_%(column_0_label)s",
            "uq": "uq_%(table_name)s_%(column_0_name)s",
            "ck": "ck_%(table_name)s_%(constraint_name)s",
            "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
            "pk": "pk_%(table_name)s"
        }
    )


def _engine_options(url: str) -> Dict[str, Any]:
    """Pool options for the configured backend"""
    options: Dict[str, Any] = {"echo": settings.DEBUG}

    if url.startswith("sqlite"):
        # in-memory sqlite lives on a single connection
        if ":memory:" in url or url.rstrip("/").endswith("sqlite+aiosqlite:"):
            options["poolclass"] = StaticPool
        options["connect_args"] = {"check_same_thread": False}
        return options

    options.update(
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_timeout=settings.DATABASE_POOL_TIMEOUT,
        pool_pre_ping=True,
        pool_recycle=3600,  # 1 hour
    )
    return options


async def init_db(database_url: Optional[str] = None, create_tables: Optional[bool] = None) -> None:
    """Initialize database connection and optionally create tables"""
    global engine, async_session_factory

    url = database_url or settings.database_url_async
    if create_tables is None:
        create_tables = settings.create_tables_on_startup

    try:
        engine = create_async_engine(url, **_engine_options(url))

        async_session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

        async with engine.begin() as conn:
            if create_tables:
                # models must be imported so their tables are registered on Base.metadata
                import models  # noqa: F401
                await conn.run_sync(Base.metadata.create_all)
            else:
                await conn.execute(text("SELECT 1"))

        logger.info("Database connection initialized successfully", create_tables=create_tables)

    except Exception as e:
        logger.error("Failed to initialize database", error=str(e))
        raise


async def close_db() -> None:
    """Close database connections"""
    global engine, async_session_factory

    if engine:
        await engine.dispose()
        engine = None
        async_session_factory = None
        logger.info("Database connections closed")


@asynccontextmanager
async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Async context manager for database sessions
    Provides automatic transaction management and cleanup
    """
    if not async_session_factory:
        logger.error("Database session requested before init_db()")
        raise StorageUnavailableError("session")

    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception as e:
            await session.rollback()
            if not isinstance(e, RecipeServiceError):
                logger.error("Database session error", error=str(e), error_type=type(e).__name__)
            raise


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for FastAPI to get database session
    """
    async with get_db_session() as session:
        yield session


class DatabaseHealthCheck:
    """Database health check utilities"""

    @staticmethod
    async def check_connection() -> bool:
        """Check if database connection is healthy"""
        try:
            async with get_db_session() as session:
                result = await session.execute(text("SELECT 1"))
                return result.scalar() == 1
        except Exception as e:
            logger.error("Database health check failed", error=str(e))
            return False


__all__ = [
    "Base",
    "init_db",
    "close_db",
    "get_db_session",
    "get_db",
    "DatabaseHealthCheck"
]
