"""Database operations for the durable key-value store."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from jwkgate.db.models_kv import KeyValueEntity


async def get_value(session: AsyncSession, name: str) -> str | None:
    """Return the stored value for ``name``, if any."""
    stmt = select(KeyValueEntity.value).where(KeyValueEntity.name == name)
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def put_value(session: AsyncSession, name: str, value: str) -> None:
    """Insert or overwrite the value for ``name``."""
    entity = await session.get(KeyValueEntity, name)
    if entity is None:
        session.add(KeyValueEntity(name=name, value=value))
    else:
        entity.value = value
    await session.flush()


class SqlKeyValueStore:
    """KeyValueStore backed by the ``kv_entries`` table."""

    def __init__(self, factory: async_sessionmaker[AsyncSession]) -> None:
        self._factory = factory

    async def get(self, name: str) -> str | None:
        async with self._factory() as session:
            return await get_value(session, name)

    async def put(self, name: str, value: str) -> None:
        async with self._factory() as session:
            try:
                await put_value(session, name, value)
                await session.commit()
            except Exception:
                await session.rollback()
                raise
