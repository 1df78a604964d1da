"""Test doubles shared across the jwkgate test suite."""

import asyncio
import json
import time
from typing import Any

import httpx
import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from jwt.algorithms import RSAAlgorithm

JWKS_URL = "https://tenant.example.com/.well-known/jwks.json"
KID = "abc"
OTHER_KID = "rotated-1"
METADATA_KEY = "https://example.com/user_metadata"


class SigningKey:
    """An RSA keypair able to mint tokens and describe itself as a JWK."""

    def __init__(self, kid: str) -> None:
        self.kid = kid
        self.private_key = rsa.generate_private_key(
            public_exponent=65537, key_size=2048
        )
        self.private_pem = self.private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        ).decode()

    def jwk(self) -> dict[str, Any]:
        public = json.loads(RSAAlgorithm.to_jwk(self.private_key.public_key()))
        return {
            "alg": "RS256",
            "kty": "RSA",
            "use": "sig",
            "n": public["n"],
            "e": public["e"],
            "kid": self.kid,
            "x5t": "thumbprint-" + self.kid,
            "x5c": ["cert-" + self.kid],
        }

    def mint(self, payload: dict[str, Any], kid: str | None = None) -> str:
        headers = {"kid": self.kid if kid is None else kid}
        return jwt.encode(payload, self.private_pem, algorithm="RS256", headers=headers)


class JWKSServer:
    """Serves a JWKS document through httpx.MockTransport and counts fetches."""

    def __init__(self, keys: list[dict[str, Any]]) -> None:
        self.keys = keys
        self.calls = 0
        self.status_code = 200
        self.body: Any = None
        self.delay = 0.0

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        body = self.body if self.body is not None else {"keys": self.keys}
        return httpx.Response(self.status_code, json=body)


class FakeClock:
    """Controllable replacement for time.time."""

    def __init__(self, now: float | None = None) -> None:
        self.now = time.time() if now is None else now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

