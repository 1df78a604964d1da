"""FastAPI application factory for the jwkgate token verifier."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from jwkgate.api.router_identity import router as identity_router
from jwkgate.core.logging import configure_logging
from jwkgate.core.settings import DatabaseSettings, VerifierSettings
from jwkgate.db.engine import create_engine, create_session_factory, create_tables
from jwkgate.db.repo_kv import SqlKeyValueStore
from jwkgate.jwks.refresh import RefreshPolicy
from jwkgate.verifier.auth0_client import Auth0JWTClient


def create_app(verifier: Auth0JWTClient | None = None) -> FastAPI:
    """Build and configure the FastAPI application.

    When ``verifier`` is omitted one is built from settings, backed by the
    SQL key-value store.
    """
    settings = VerifierSettings()
    configure_logging(log_level=settings.log_level)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if getattr(app.state, "verifier", None) is not None:
            yield
            return

        engine = create_engine(DatabaseSettings())
        await create_tables(engine)
        async with httpx.AsyncClient() as http_client:
            app.state.verifier = Auth0JWTClient(
                SqlKeyValueStore(create_session_factory(engine)),
                settings.jwks_url,
                settings.user_metadata_key,
                policy=RefreshPolicy(
                    settings.jwks_refresh_interval,
                    allow_empty_key_set=settings.jwks_allow_empty,
                ),
                store_name=settings.jwks_store_name,
                http_client=http_client,
            )
            try:
                yield
            finally:
                await engine.dispose()

    app = FastAPI(
        title="jwkgate",
        version="0.1.0",
        lifespan=lifespan,
    )
    if verifier is not None:
        app.state.verifier = verifier
    app.include_router(identity_router)
    return app
