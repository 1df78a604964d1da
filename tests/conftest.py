"""Shared test fixtures for jwkgate."""

from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from jwkgate.db.models_kv import KeyValueEntity
from jwkgate.store.base import MemoryKeyValueStore
from tests.support import (
    KID,
    METADATA_KEY,
    OTHER_KID,
    FakeClock,
    JWKSServer,
    SigningKey,
)


@pytest.fixture(scope="session")
def signing_key() -> SigningKey:
    return SigningKey(KID)


@pytest.fixture(scope="session")
def other_signing_key() -> SigningKey:
    return SigningKey(OTHER_KID)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def jwks_server(signing_key: SigningKey) -> JWKSServer:
    return JWKSServer([signing_key.jwk()])


@pytest.fixture
async def http_client(jwks_server: JWKSServer) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.MockTransport(jwks_server.handler)
    async with httpx.AsyncClient(transport=transport) as client:
        yield client


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def claims(clock: FakeClock) -> Callable[..., dict[str, Any]]:
    """Build an Auth0 shaped payload expiring an hour after ``clock``."""

    def _claims(**overrides: Any) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "sub": "user1",
            "exp": int(clock.now) + 3600,
            "permissions": ["read:devices"],
            METADATA_KEY: {"email": "user1@example.com", "user_id": "auth0|user1"},
        }
        payload.update(overrides)
        return payload

    return _claims


@pytest.fixture
async def session_factory() -> AsyncIterator[async_sessionmaker[AsyncSession]]:
    """In-memory SQLite session factory with the store tables created."""
    engine = create_async_engine("sqlite+aiosqlite://", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(KeyValueEntity.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    async with session_factory() as session:
        yield session
