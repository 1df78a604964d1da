"""Auth0 flavoured verifier: requires user metadata and permissions claims."""

from typing import Any

from jwkgate.core.errors import MalformedTokenError, MissingUserIdError
from jwkgate.crypto.digest import hash_identifier
from jwkgate.crypto.types import DecodedToken
from jwkgate.store.base import KeyValueStore
from jwkgate.verifier.jwt_client import JWTClient


class Auth0Token(DecodedToken):
    """A verified token carrying an Auth0 user metadata claim."""

    user_metadata_key: str

    @property
    def user_metadata(self) -> dict[str, Any]:
        return self.payload[self.user_metadata_key]

    @property
    def permissions(self) -> list[str]:
        return list(self.payload["permissions"])

    def user_id_hashed(self) -> str:
        """Pseudonymised user id; computed only when asked for."""
        user_id = self.user_metadata.get("user_id")
        if not user_id:
            raise MissingUserIdError()
        return hash_identifier(str(user_id))


class Auth0JWTClient(JWTClient):
    """JWTClient that also checks the Auth0 payload shape."""

    def __init__(
        self,
        store: KeyValueStore,
        jwks_url: str,
        user_metadata_key: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(store, jwks_url, **kwargs)
        self.user_metadata_key = user_metadata_key

    def _is_well_formed(self, token: DecodedToken) -> bool:
        metadata = token.payload.get(self.user_metadata_key)
        if not isinstance(metadata, dict) or not metadata.get("email"):
            return False
        return isinstance(token.payload.get("permissions"), list)

    async def verify_and_decode(self, request: Any) -> Auth0Token:
        token = await super().verify_and_decode(request)
        if not self._is_well_formed(token):
            raise MalformedTokenError()
        return Auth0Token(
            **token.model_dump(), user_metadata_key=self.user_metadata_key
        )
