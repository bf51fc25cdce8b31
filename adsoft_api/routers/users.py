from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request, status

from ..ad import DirectoryUserRecord
from ..deps import get_directory_service, require_client
from ..exceptions import UpstreamDirectoryError


router = APIRouter(prefix="/api/aduser", tags=["aduser"])
log = logging.getLogger(__name__)


def _upstream_failure() -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Directory service error")


@router.get("/ou/{ou_name}", response_model=list[DirectoryUserRecord])
def users_by_ou(ou_name: str, request: Request):
    require_client(request)

    try:
        users = get_directory_service(request).get_users_by_ou(ou_name)
    except UpstreamDirectoryError:
        raise _upstream_failure()

    if not users:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"No users found in OU: {ou_name}")
    return users


@router.get("/{username}", response_model=DirectoryUserRecord)
def user_details(username: str, request: Request):
    require_client(request)

    try:
        user = get_directory_service(request).get_user_details(username)
    except UpstreamDirectoryError:
        raise _upstream_failure()

    if user is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"User {username} not found")
    return user
