"""Tests for the remote JWKS fetcher."""

import httpx
import pytest

from jwkgate.core.errors import JWKSFetchError, MalformedJWKSError
from jwkgate.jwks.fetcher import JWKSFetcher
from tests.support import JWKS_URL, JWKSServer, SigningKey


class TestFetch:
    """Tests for JWKSFetcher.fetch."""

    async def test_returns_entries(
        self,
        http_client: httpx.AsyncClient,
        jwks_server: JWKSServer,
        signing_key: SigningKey,
    ) -> None:
        entries = await JWKSFetcher(JWKS_URL, client=http_client).fetch()
        assert [e.kid for e in entries] == [signing_key.kid]
        assert entries[0].x5t == f"thumbprint-{signing_key.kid}"
        assert jwks_server.calls == 1

    async def test_empty_key_list(
        self, http_client: httpx.AsyncClient, jwks_server: JWKSServer
    ) -> None:
        jwks_server.keys = []
        assert await JWKSFetcher(JWKS_URL, client=http_client).fetch() == []

    async def test_missing_keys_is_malformed(
        self, http_client: httpx.AsyncClient, jwks_server: JWKSServer
    ) -> None:
        jwks_server.body = {"error": "nope"}
        with pytest.raises(MalformedJWKSError):
            await JWKSFetcher(JWKS_URL, client=http_client).fetch()

    async def test_invalid_entry_is_malformed(
        self, http_client: httpx.AsyncClient, jwks_server: JWKSServer
    ) -> None:
        jwks_server.keys = [{"kty": "RSA"}]
        with pytest.raises(MalformedJWKSError):
            await JWKSFetcher(JWKS_URL, client=http_client).fetch()

    async def test_http_error_status(
        self, http_client: httpx.AsyncClient, jwks_server: JWKSServer
    ) -> None:
        jwks_server.status_code = 500
        with pytest.raises(JWKSFetchError):
            await JWKSFetcher(JWKS_URL, client=http_client).fetch()

    async def test_non_json_body(self) -> None:
        transport = httpx.MockTransport(lambda _req: httpx.Response(200, text="<html>"))
        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(MalformedJWKSError):
                await JWKSFetcher(JWKS_URL, client=client).fetch()

    async def test_transport_error(self) -> None:
        def _fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(_fail)) as client:
            with pytest.raises(JWKSFetchError):
                await JWKSFetcher(JWKS_URL, client=client).fetch()
