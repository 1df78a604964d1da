"""RSA public key import from JWK form and RS256 signature checks."""

import json

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPublicKey
from jwt.algorithms import RSAAlgorithm
from jwt.exceptions import InvalidKeyError

from jwkgate.core.errors import MalformedJWKSError
from jwkgate.crypto.types import JWKEntry


def import_verification_key(jwk: JWKEntry) -> RSAPublicKey:
    """Load the RSA public key described by a JWK."""
    if jwk.kty != "RSA":
        raise MalformedJWKSError(
            f"Unsupported key type {jwk.kty!r} for kid {jwk.kid!r}"
        )
    try:
        loaded = RSAAlgorithm.from_jwk(
            json.dumps({"kty": "RSA", "n": jwk.n, "e": jwk.e})
        )
    except (InvalidKeyError, ValueError) as exc:
        raise MalformedJWKSError(f"Unable to import key {jwk.kid!r}") from exc
    if not isinstance(loaded, RSAPublicKey):
        raise MalformedJWKSError(f"Key {jwk.kid!r} is not an RSA public key")
    return loaded


def verify_rs256(key: RSAPublicKey, message: bytes, signature: bytes) -> bool:
    """Check an RSASSA-PKCS1-v1_5 / SHA-256 signature over ``message``."""
    try:
        key.verify(signature, message, padding.PKCS1v15(), hashes.SHA256())
    except InvalidSignature:
        return False
    return True
