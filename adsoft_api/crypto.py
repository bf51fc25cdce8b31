"""Symmetric encryption of configuration secrets.

AES-256-CBC with PKCS#7 padding over a key/IV pair supplied by the operator
as base64 text. The IV is fixed for the process lifetime, so equal
plaintexts produce equal ciphertexts. This leaks equality of secrets, but
keeps values encrypted by earlier deployments readable.
"""
from __future__ import annotations

import base64
import binascii
import logging
import os
from dataclasses import dataclass

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .exceptions import ConfigurationError, DecryptionFailure

log = logging.getLogger(__name__)

KEY_SIZE = 32  # AES-256
IV_SIZE = 16  # один блок AES
_BLOCK_BITS = 128


def _b64decode(value: str) -> bytes:
    return base64.b64decode(value.strip().encode("ascii"), validate=True)


@dataclass(frozen=True)
class EncryptionKeyMaterial:
    key: bytes
    iv: bytes

    def __post_init__(self) -> None:
        if len(self.key) != KEY_SIZE:
            raise ConfigurationError(
                f"Encryption key must be {KEY_SIZE} bytes (256 bits) when base64 decoded, got {len(self.key)}"
            )
        if len(self.iv) != IV_SIZE:
            raise ConfigurationError(
                f"IV must be {IV_SIZE} bytes (128 bits) when base64 decoded, got {len(self.iv)}"
            )

    def __repr__(self) -> str:
        return "EncryptionKeyMaterial(key=***, iv=***)"

    @classmethod
    def from_base64(cls, key_b64: str | None, iv_b64: str | None) -> "EncryptionKeyMaterial":
        if not (key_b64 or "").strip() or not (iv_b64 or "").strip():
            raise ConfigurationError("Encryption key or IV not configured")
        try:
            key = _b64decode(key_b64)
            iv = _b64decode(iv_b64)
        except (binascii.Error, UnicodeEncodeError) as e:
            raise ConfigurationError("Encryption key or IV is not valid base64") from e
        return cls(key=key, iv=iv)


def generate_key_material() -> tuple[str, str]:
    """Return a fresh random (key, iv) pair as base64 strings."""
    key = base64.b64encode(os.urandom(KEY_SIZE)).decode("ascii")
    iv = base64.b64encode(os.urandom(IV_SIZE)).decode("ascii")
    return key, iv


class SecretCipher:
    def __init__(self, material: EncryptionKeyMaterial) -> None:
        self._material = material

    def _cipher(self) -> Cipher:
        return Cipher(algorithms.AES(self._material.key), modes.CBC(self._material.iv))

    def encrypt(self, plaintext: str) -> str:
        if not plaintext:
            return ""

        padder = padding.PKCS7(_BLOCK_BITS).padder()
        data = padder.update(plaintext.encode("utf-8")) + padder.finalize()

        encryptor = self._cipher().encryptor()
        raw = encryptor.update(data) + encryptor.finalize()
        return base64.b64encode(raw).decode("ascii")

    def decrypt(self, ciphertext: str) -> str:
        if not ciphertext:
            return ""

        try:
            raw = _b64decode(ciphertext)
        except (binascii.Error, UnicodeEncodeError) as e:
            log.warning("Не удалось расшифровать значение: некорректный base64")
            raise DecryptionFailure("input is not valid base64") from e

        try:
            decryptor = self._cipher().decryptor()
            padded = decryptor.update(raw) + decryptor.finalize()
            unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
            data = unpadder.update(padded) + unpadder.finalize()
        except ValueError as e:
            # неверная длина блока или padding (чаще всего — другой ключ)
            log.warning("Не удалось расшифровать значение: %s", e)
            raise DecryptionFailure(str(e)) from e

        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as e:
            log.warning("Не удалось расшифровать значение: результат не UTF-8")
            raise DecryptionFailure("plaintext is not valid UTF-8") from e
