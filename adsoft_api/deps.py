from __future__ import annotations

from fastapi import Request, HTTPException, status

from .auth import bearer_token, client_for_api_key
from .services import DirectoryService, SecretCodec
from .session import TokenIssuer


def get_directory_service(request: Request) -> DirectoryService:
    return request.app.state.directory_service


def get_codec(request: Request) -> SecretCodec:
    return request.app.state.codec


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def require_api_key(request: Request) -> str:
    """Client id for the X-API-Key header, 401 otherwise."""
    client_id = client_for_api_key(request.app.state.api_keys, request.headers.get("X-API-Key"))
    if not client_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid API key")
    return client_id


def require_bearer(request: Request) -> str:
    """Client id from a valid bearer token, 401 otherwise."""
    token = bearer_token(request.headers.get("Authorization"))
    client_id = get_token_issuer(request).read(token) if token else None
    if not client_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return client_id


def require_client(request: Request) -> str:
    """Directory lookups need both a bearer token and an API key."""
    client_id = require_bearer(request)
    require_api_key(request)
    return client_id


def require_config_access(request: Request) -> str:
    if not request.app.state.env.config_endpoints_require_auth:
        return ""
    return require_bearer(request)
