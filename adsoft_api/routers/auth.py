from __future__ import annotations

import logging

from fastapi import APIRouter, Request

from ..deps import get_token_issuer, require_api_key
from ..schemas import TokenResponse


router = APIRouter(prefix="/api/auth", tags=["auth"])
log = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def issue_token(request: Request):
    client_id = require_api_key(request)

    issuer = get_token_issuer(request)
    token = issuer.issue(client_id)
    log.info("Выдан токен для клиента %s", client_id)
    return TokenResponse(token=token, expires_in=issuer.ttl_seconds)
