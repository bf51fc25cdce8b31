from __future__ import annotations

import hmac
from typing import Mapping


def client_for_api_key(api_keys: Mapping[str, str], api_key: str | None) -> str | None:
    """Return the client id owning ``api_key``, or None.

    Every configured key is compared in constant time.
    """
    if not api_key:
        return None
    found: str | None = None
    for client_id, key in api_keys.items():
        if key and hmac.compare_digest(key.encode("utf-8"), api_key.encode("utf-8")):
            found = client_id
    return found


def bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    scheme, _, token = (authorization or "").strip().partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()
