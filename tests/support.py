"""Shared test data: key material, directory entries and a fake gateway."""

from __future__ import annotations

import base64
from datetime import datetime, timezone
from typing import Any, Optional

from adsoft_api.ad import DirectoryEntry

ZERO_KEY = base64.b64encode(b"\x00" * 32).decode("ascii")
ZERO_IV = base64.b64encode(b"\x00" * 16).decode("ascii")

API_KEY = "key-portal-123"
PHOTO = b"\x89PNG\r\n\x1a\nfake-image"
JANE_DN = "CN=Jane Doe,OU=Sales,DC=corp,DC=local"


class BrokenAttributes(dict):
    """Attribute map whose listed attributes raise when read."""

    def __init__(self, data: dict[str, Any], broken: list[str]) -> None:
        super().__init__(data)
        self.broken = {b.lower() for b in broken}

    def __getitem__(self, key: str) -> Any:
        if key.lower() in self.broken:
            raise RuntimeError(f"cannot read {key}")
        return super().__getitem__(key)


def jane_attributes() -> dict[str, Any]:
    return {
        "sAMAccountName": ["jdoe"],
        "mail": ["jane.doe@corp.local"],
        "displayName": ["Jane Doe"],
        "displayNameAr": ["جين دو"],
        "thumbnailPhoto": [PHOTO],
        "department": ["Sales"],
        "title": ["Account Manager"],
        "memberOf": ["CN=Sales,OU=Groups,DC=corp,DC=local", "CN=VPN,OU=Groups,DC=corp,DC=local"],
        "whenCreated": [datetime(2020, 1, 2, 3, 4, 5, tzinfo=timezone.utc)],
        "objectGUID": [b"\xff\xfe\x01\x02"],
        "description": [],
    }


def make_jane(broken: Optional[list[str]] = None, **overrides: Any) -> DirectoryEntry:
    attrs = jane_attributes()
    attrs.update(overrides)
    if broken:
        attrs = BrokenAttributes(attrs, broken)
    return DirectoryEntry(JANE_DN, attrs)


def make_principal(dn: str, sam: Optional[str], **extra: Any) -> DirectoryEntry:
    """Principal shaped like a paged_search result (scalar attribute values)."""
    attrs: dict[str, Any] = {"distinguishedName": dn}
    if sam is not None:
        attrs["sAMAccountName"] = sam
    attrs.update(extra)
    return DirectoryEntry.from_search_result({"type": "searchResEntry", "dn": dn, "attributes": attrs})


class FakeDirectoryClient:
    """In-memory stand-in for ADClient with the same (ok, message, data) contract."""

    def __init__(
        self,
        users: dict[str, DirectoryEntry] | None = None,
        principals: list[DirectoryEntry] | None = None,
    ) -> None:
        self.users = users or {}
        self.principals = principals or []
        self.fail = False
        self.calls: list[str] = []

    def find_user(self, account_name: str) -> tuple[bool, str, Optional[DirectoryEntry]]:
        self.calls.append(f"find_user:{account_name}")
        if self.fail:
            return False, "LDAP error: socket closed", None
        entry = self.users.get(account_name)
        if entry is None:
            return True, f"User {account_name} not found.", None
        return True, "OK", entry

    def list_user_principals(self) -> tuple[bool, str, list[DirectoryEntry]]:
        self.calls.append("list_user_principals")
        if self.fail:
            return False, "Bind failed: invalidCredentials", []
        return True, "OK", list(self.principals)


def sample_principals() -> list[DirectoryEntry]:
    return [
        make_principal(
            JANE_DN, "jdoe",
            mail="jane.doe@corp.local", displayName="Jane Doe", thumbnailPhoto=PHOTO,
            department="Sales",
        ),
        make_principal("CN=Bob Roe,OU=Sales,OU=Staff,DC=corp,DC=local", "broe", displayName="Bob Roe"),
        make_principal("CN=Ann Poe,OU=Marketing,DC=corp,DC=local", "apoe"),
        make_principal("CN=Sam Koe,OU=SalesEast,DC=corp,DC=local", "skoe"),
        make_principal("CN=Orphan,OU=Sales,DC=corp,DC=local", None),
    ]
