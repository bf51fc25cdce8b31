from __future__ import annotations

import logging
from dataclasses import dataclass

from ..crypto import SecretCipher, generate_key_material

log = logging.getLogger(__name__)

DEFAULT_SETTING = "ENCRYPTED_VALUE"


@dataclass(frozen=True)
class GeneratedKeys:
    key: str
    iv: str
    config_snippet: str


def keys_snippet(key: str, iv: str) -> str:
    """`.env` lines for a generated key pair."""
    return f"ENCRYPTION_KEY={key}\nENCRYPTION_IV={iv}"


def encryption_snippet(encrypted: str, setting: str = "") -> str:
    name = (setting or "").strip() or DEFAULT_SETTING
    return f"{name}={encrypted}"


class SecretCodec:
    """Operator-facing encryption of configuration values."""

    def __init__(self, cipher: SecretCipher) -> None:
        self._cipher = cipher

    def generate_keys(self) -> GeneratedKeys:
        key, iv = generate_key_material()
        log.info("Сгенерирована новая пара ключ/IV")
        return GeneratedKeys(key=key, iv=iv, config_snippet=keys_snippet(key, iv))

    def encrypt_value(self, plaintext: str) -> str:
        if not plaintext:
            raise ValueError("Value to encrypt cannot be empty")
        log.info("Шифрование значения конфигурации")
        return self._cipher.encrypt(plaintext)

    def decrypt_value(self, encrypted: str) -> str:
        if not encrypted:
            raise ValueError("Value to decrypt cannot be empty")
        log.info("Расшифровка значения конфигурации")
        return self._cipher.decrypt(encrypted)
