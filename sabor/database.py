"""
Database Connection Module
Builds SQLAlchemy async engines and session factories for the SQL store.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

logger = logging.getLogger(__name__)


# Base class for all our models
class Base(DeclarativeBase):
    pass


def create_engine_from_url(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine.

    PostgreSQL gets a sized connection pool; SQLite (tests, local runs)
    keeps SQLAlchemy's default pool.
    """
    options = {"echo": echo}
    if not database_url.startswith("sqlite"):
        options.update(pool_size=5, max_overflow=10)
    return create_async_engine(database_url, **options)


def create_session_maker(engine: AsyncEngine) -> async_sessionmaker:
    """Session factory - objects remain accessible after commit."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """
    Create all tables in database.
    Called once when the SQL store starts.
    """
    # Register the tables on Base.metadata
    from sabor import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ Database tables created successfully!")
