from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, status

from ..deps import get_codec, require_config_access
from ..exceptions import DecryptionFailure
from ..schemas import (
    ConfigurationRequest,
    DecryptionResponse,
    EncryptionKeysResponse,
    EncryptionResponse,
)
from ..services import encryption_snippet


router = APIRouter(prefix="/api/configuration", tags=["configuration"])
log = logging.getLogger(__name__)


@router.get("/generate-keys", response_model=EncryptionKeysResponse)
def generate_keys(request: Request):
    require_config_access(request)

    keys = get_codec(request).generate_keys()
    return EncryptionKeysResponse(key=keys.key, iv=keys.iv, config_snippet=keys.config_snippet)


@router.post("/encrypt", response_model=EncryptionResponse)
def encrypt_value(body: ConfigurationRequest, request: Request):
    require_config_access(request)

    if not body.value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Value to encrypt cannot be empty")

    encrypted = get_codec(request).encrypt_value(body.value)
    return EncryptionResponse(
        original_value=body.value,
        encrypted_value=encrypted,
        config_snippet=encryption_snippet(encrypted, body.setting),
    )


@router.post("/decrypt", response_model=DecryptionResponse)
def decrypt_value(body: ConfigurationRequest, request: Request):
    require_config_access(request)

    if not body.value:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Value to decrypt cannot be empty")

    try:
        decrypted = get_codec(request).decrypt_value(body.value)
    except DecryptionFailure as e:
        log.error("Не удалось расшифровать значение: %s", e.reason)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Failed to decrypt value")
    return DecryptionResponse(decrypted_value=decrypted)
