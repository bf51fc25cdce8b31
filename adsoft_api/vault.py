from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .crypto import SecretCipher
from .exceptions import ConfigurationError, DecryptionFailure

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class BindCredentials:
    username: str
    password: str = field(repr=False)


class CredentialVault:
    """Decrypts the service's own directory bind credentials at startup."""

    def __init__(self, cipher: SecretCipher) -> None:
        self._cipher = cipher

    def unlock(self, encrypted_username: str, encrypted_password: str) -> BindCredentials:
        if not (encrypted_username or "").strip() or not (encrypted_password or "").strip():
            raise ConfigurationError("Encrypted AD bind username or password not configured")

        try:
            username = self._cipher.decrypt(encrypted_username)
            password = self._cipher.decrypt(encrypted_password)
        except DecryptionFailure as e:
            log.error("Не удалось расшифровать учётные данные AD: %s", e.reason)
            raise ConfigurationError("Failed to decrypt Active Directory credentials") from e

        if not username or not password:
            raise ConfigurationError("Decrypted AD bind username or password is empty")

        log.info("Учётные данные AD расшифрованы")
        return BindCredentials(username=username, password=password)
