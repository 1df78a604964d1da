"""Async SQLAlchemy engine and session management."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from jwkgate.core.settings import DatabaseSettings
from jwkgate.db.models_kv import KeyValueEntity


def create_engine(db: DatabaseSettings) -> AsyncEngine:
    """Build the async engine for the durable store."""
    if db.is_sqlite:
        return create_async_engine(db.url)
    return create_async_engine(
        db.url,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory with objects kept usable after commit."""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_tables(engine: AsyncEngine) -> None:
    """Create the store tables if they do not exist yet."""
    async with engine.begin() as conn:
        await conn.run_sync(KeyValueEntity.metadata.create_all)
