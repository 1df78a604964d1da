"""Compact JWT parsing and Bearer credential extraction.

A compact JWT is three base64url strings joined with ``.``: a header, a
payload and the signature. The header and payload decode to JSON objects,
the signature to raw bytes. The received strings are kept as-is because
they, not a re-serialisation of the decoded JSON, are what was signed.
"""

import binascii
import json
import re
from collections.abc import Mapping
from typing import Any

from jwt.utils import base64url_decode

from jwkgate.core.errors import AuthorizationHeaderError, MalformedTokenError
from jwkgate.crypto.types import DecodedToken, RawSegments

BEARER_PREFIX = "Bearer "
TOKEN_SEGMENTS = 3
_BASE64URL = re.compile(r"[A-Za-z0-9_-]+")


def _decode_segment(segment: str) -> bytes:
    if not _BASE64URL.fullmatch(segment):
        raise MalformedTokenError("Token segment is not valid base64url")
    try:
        return base64url_decode(segment)
    except (binascii.Error, ValueError) as exc:
        raise MalformedTokenError("Token segment is not valid base64url") from exc


def _decode_json_segment(segment: str, name: str) -> dict[str, Any]:
    try:
        decoded = json.loads(_decode_segment(segment))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise MalformedTokenError(f"Token {name} is not valid JSON") from exc
    if not isinstance(decoded, dict):
        raise MalformedTokenError(f"Token {name} is not a JSON object")
    return decoded


def decode_token(token: str) -> DecodedToken:
    """Split a compact JWT and decode each of its segments."""
    parts = token.split(".")
    if len(parts) != TOKEN_SEGMENTS or not all(parts):
        raise MalformedTokenError("Token must have three non-empty segments")
    header_b64, payload_b64, signature_b64 = parts
    return DecodedToken(
        header=_decode_json_segment(header_b64, "header"),
        payload=_decode_json_segment(payload_b64, "payload"),
        signature=_decode_segment(signature_b64),
        raw=RawSegments(
            header=header_b64, payload=payload_b64, signature=signature_b64
        ),
    )


def extract_bearer(headers: Mapping[str, str]) -> str:
    """Return the credential from an ``Authorization: Bearer`` header."""
    auth = headers.get("Authorization") or headers.get("authorization")
    if not auth or not auth.startswith(BEARER_PREFIX):
        raise AuthorizationHeaderError()
    token = auth[len(BEARER_PREFIX) :].strip()
    if not token:
        raise AuthorizationHeaderError()
    return token
