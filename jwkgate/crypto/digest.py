"""Identifier pseudonymisation digest."""

import hashlib


def hash_identifier(value: str) -> str:
    """MD5 hex digest of a UTF-8 string, for pseudonymising identifiers."""
    return hashlib.md5(value.encode("utf-8"), usedforsecurity=False).hexdigest()
