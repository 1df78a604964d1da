"""Type definitions for JWKS records and decoded tokens."""

from typing import Any

from pydantic import BaseModel, ConfigDict


class JWKEntry(BaseModel):
    """Single JWK entry in a JWKS response."""

    model_config = ConfigDict(extra="allow", frozen=True)

    kty: str = "RSA"
    use: str = "sig"
    alg: str = "RS256"
    kid: str
    n: str
    e: str = "AQAB"
    x5t: str | None = None
    x5c: list[str] | None = None


class JWKSResponse(BaseModel):
    """JSON Web Key Set response."""

    keys: list[JWKEntry]


class RawSegments(BaseModel):
    """The three base64url segments exactly as received."""

    model_config = ConfigDict(frozen=True)

    header: str
    payload: str
    signature: str


class DecodedToken(BaseModel):
    """A compact JWT split into its decoded parts."""

    header: dict[str, Any]
    payload: dict[str, Any]
    signature: bytes
    raw: RawSegments

    @property
    def signing_input(self) -> bytes:
        """Bytes covered by the signature: the raw header and payload."""
        return f"{self.raw.header}.{self.raw.payload}".encode("ascii")
