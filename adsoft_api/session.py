from __future__ import annotations

from typing import Any, Dict
from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

TOKEN_SALT = "adsoft-api-token"


class TokenIssuer:
    """Short-lived bearer tokens bound to an API client id."""

    def __init__(self, secret: str, ttl_minutes: int) -> None:
        self.ttl_minutes = max(1, int(ttl_minutes))
        self._serializer = URLSafeTimedSerializer(secret, salt=TOKEN_SALT)

    @property
    def ttl_seconds(self) -> int:
        return self.ttl_minutes * 60

    def issue(self, client_id: str) -> str:
        return self._serializer.dumps({"c": client_id})

    def read(self, token: str) -> str | None:
        """Client id from a valid token, None for bad or expired tokens."""
        try:
            data: Dict[str, Any] = self._serializer.loads(token, max_age=self.ttl_seconds)
        except (BadSignature, SignatureExpired):
            return None
        if not isinstance(data, dict) or not data.get("c"):
            return None
        return str(data["c"])
