"""Bearer JWT verification against a provider's published key set."""

import math
import time
from collections.abc import Callable, Mapping
from typing import Any

import httpx

from jwkgate.core.errors import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
    MissingExpiryError,
    MissingKidError,
)
from jwkgate.core.settings import JWKS_STORE_NAME_DEFAULT
from jwkgate.crypto.keys import verify_rs256
from jwkgate.crypto.token_codec import decode_token, extract_bearer
from jwkgate.crypto.types import DecodedToken
from jwkgate.jwks.cache import JWKSCache
from jwkgate.jwks.fetcher import JWKSFetcher
from jwkgate.jwks.refresh import RefreshPolicy
from jwkgate.store.base import KeyValueStore


def _request_headers(request: Any) -> Mapping[str, str]:
    """Headers of a Starlette/httpx request, or the mapping itself."""
    headers = getattr(request, "headers", request)
    if not isinstance(headers, Mapping):
        raise TypeError("request must expose a headers mapping")
    return headers


class JWTClient:
    """Verifies RS256 bearer tokens on inbound requests.

    Only the signature and expiry are checked here; subclasses add
    provider-specific claim checks on top of :meth:`verify_and_decode`.
    ``clock`` drives both the expiry check and the default rate gate, so it
    cannot be combined with a caller-supplied ``policy``.
    """

    def __init__(
        self,
        store: KeyValueStore,
        jwks_url: str,
        *,
        policy: RefreshPolicy | None = None,
        store_name: str = JWKS_STORE_NAME_DEFAULT,
        http_client: httpx.AsyncClient | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        if policy is not None and clock is not time.time:
            raise ValueError("pass the clock to the RefreshPolicy, not both")
        self.jwks = JWKSCache(
            store,
            JWKSFetcher(jwks_url, client=http_client),
            policy=policy or RefreshPolicy(clock=clock),
            store_name=store_name,
        )
        self._clock = clock

    async def verify_and_decode(self, request: Any) -> DecodedToken:
        """Parse the bearer JWT on ``request`` and validate it."""
        encoded = extract_bearer(_request_headers(request))
        token = self.decode_jwt(encoded)

        exp = token.payload.get("exp")
        if exp is None:
            raise MissingExpiryError()
        if isinstance(exp, bool) or not isinstance(exp, int | float):
            raise MalformedTokenError("Token expiry is not a number")
        if not math.isfinite(exp):
            raise MalformedTokenError("Token expiry is not a finite number")
        if not exp > self._clock():
            raise ExpiredTokenError()

        if not await self.is_valid_jwt_signature(token):
            raise InvalidSignatureError()
        return token

    def decode_jwt(self, token: str) -> DecodedToken:
        return decode_token(token)

    async def is_valid_jwt_signature(self, token: DecodedToken) -> bool:
        """Verify the signature over the raw ``header.payload`` bytes."""
        kid = token.header.get("kid")
        if not kid or not isinstance(kid, str):
            raise MissingKidError()
        key = await self.jwks.get(kid)
        return verify_rs256(key, token.signing_input, token.signature)
