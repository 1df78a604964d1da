"""Remote JWKS document retrieval."""

import httpx
from pydantic import ValidationError

from jwkgate.core.errors import JWKSFetchError, MalformedJWKSError
from jwkgate.crypto.types import JWKEntry, JWKSResponse


class JWKSFetcher:
    """Fetches the key set published at a well-known URL."""

    def __init__(self, url: str, client: httpx.AsyncClient | None = None) -> None:
        self.url = url
        self._client = client

    async def _get(self) -> httpx.Response:
        if self._client is not None:
            return await self._client.get(self.url)
        async with httpx.AsyncClient() as client:
            return await client.get(self.url)

    async def fetch(self) -> list[JWKEntry]:
        """GET the JWKS document and validate its ``keys`` list."""
        try:
            response = await self._get()
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise JWKSFetchError(f"JWKS request to {self.url} failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedJWKSError("JWKS response is not JSON") from exc
        if not isinstance(body, dict) or not isinstance(body.get("keys"), list):
            raise MalformedJWKSError("Undefined jwks returned from identity provider")
        try:
            return JWKSResponse.model_validate(body).keys
        except ValidationError as exc:
            raise MalformedJWKSError("JWKS entries are malformed") from exc
