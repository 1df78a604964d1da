"""Two-tier JWKS cache: in-process map in front of a durable store.

Lookups are served from memory once the cache has loaded. The first lookup
on an instance loads the key set from the durable store, falling back to the
remote endpoint when the store is empty. A lookup for an unknown kid triggers
one rate-gated remote refresh before failing.
"""

import asyncio
import json

from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from pydantic import ValidationError

from jwkgate.core.errors import MalformedJWKSError, UnknownKeyError
from jwkgate.core.logging import get_logger
from jwkgate.core.settings import JWKS_STORE_NAME_DEFAULT
from jwkgate.crypto.keys import import_verification_key
from jwkgate.crypto.types import JWKEntry
from jwkgate.jwks.fetcher import JWKSFetcher
from jwkgate.jwks.refresh import RefreshPolicy
from jwkgate.store.base import KeyValueStore

logger = get_logger(__name__)


def serialize_jwks(jwks: dict[str, JWKEntry]) -> str:
    """Serialize a kid -> JWK mapping for the durable store."""
    return json.dumps(
        {kid: jwk.model_dump(exclude_none=True) for kid, jwk in jwks.items()}
    )


def deserialize_jwks(stored: str) -> dict[str, JWKEntry]:
    """Parse a stored kid -> JWK mapping."""
    try:
        raw = json.loads(stored)
        if not isinstance(raw, dict):
            raise MalformedJWKSError("Stored JWKS is not a JSON object")
        entries = [JWKEntry.model_validate(jwk) for jwk in raw.values()]
    except (json.JSONDecodeError, ValidationError) as exc:
        raise MalformedJWKSError("Stored JWKS could not be parsed") from exc
    return {jwk.kid: jwk for jwk in entries}


def _import_all(jwks: dict[str, JWKEntry]) -> dict[str, RSAPublicKey]:
    return {kid: import_verification_key(jwk) for kid, jwk in jwks.items()}


class JWKSCache:
    """Resolves verification keys by kid."""

    def __init__(
        self,
        store: KeyValueStore,
        fetcher: JWKSFetcher,
        *,
        policy: RefreshPolicy | None = None,
        store_name: str = JWKS_STORE_NAME_DEFAULT,
    ) -> None:
        self._store = store
        self._fetcher = fetcher
        self._policy = policy or RefreshPolicy()
        self._store_name = store_name

        self._jwks: dict[str, JWKEntry] = {}
        self._keys: dict[str, RSAPublicKey] = {}
        self._loaded = False
        self._load_lock = asyncio.Lock()

    @property
    def loaded(self) -> bool:
        return self._loaded

    @property
    def kids(self) -> set[str]:
        return set(self._jwks)

    async def get(self, kid: str) -> RSAPublicKey:
        """Return the verification key for ``kid``."""
        if not self._loaded:
            async with self._load_lock:
                # Another caller may have finished loading while we waited.
                if not self._loaded:
                    await self._load()
                    self._loaded = True

        if kid in self._jwks:
            return self._keys[kid]

        await self.refresh()
        if kid not in self._jwks:
            logger.info("jwks_unknown_kid", kid=kid, known=sorted(self._jwks))
            raise UnknownKeyError()
        return self._keys[kid]

    async def refresh(self) -> bool:
        """Replace the key set from the remote endpoint if the gate allows.

        Returns False when the fetch was suppressed by the rate gate.
        """
        if not self._policy.try_acquire():
            logger.debug(
                "jwks_refresh_suppressed", not_before=self._policy.not_before
            )
            return False

        entries = await self._fetcher.fetch()
        if not entries:
            if not self._policy.allow_empty_key_set:
                raise MalformedJWKSError("Identity provider returned an empty key set")
            logger.warning("jwks_empty_key_set", url=self._fetcher.url)

        jwks = {jwk.kid: jwk for jwk in entries}
        keys = _import_all(jwks)
        self._jwks, self._keys = jwks, keys
        await self._store.put(self._store_name, serialize_jwks(jwks))
        logger.info("jwks_refreshed", key_count=len(jwks), store=self._store_name)
        return True

    async def _load(self) -> None:
        stored = await self._store.get(self._store_name)
        if stored is None:
            # Empty store: the refresh populates memory and the store.
            logger.info("jwks_store_empty", store=self._store_name)
            await self.refresh()
            return

        jwks = deserialize_jwks(stored)
        keys = _import_all(jwks)
        self._jwks, self._keys = jwks, keys
        logger.info("jwks_loaded_from_store", key_count=len(jwks))
