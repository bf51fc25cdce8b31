from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Mapping

from ..exceptions import AttributeReadFailure

# Разделитель для многозначных атрибутов (как для списков DN групп в настройках)
MULTI_VALUE_SEPARATOR = "; "


def _text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        # бинарные атрибуты (objectSid, objectGUID, фото) не декодируются в текст
        return bytes(value).decode("utf-8")
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat(timespec="seconds")
    return str(value)


def _values(raw: Any) -> list[Any]:
    vals = raw if isinstance(raw, (list, tuple)) else [raw]
    return [v for v in vals if v is not None]


class DirectoryEntry:
    """Read-only view of one directory object's named attributes.

    Lookups are case-insensitive, as in AD. Any failure while reading or
    converting one attribute surfaces as ``AttributeReadFailure`` for that
    attribute only.
    """

    def __init__(self, dn: str, attributes: Mapping[str, Any]) -> None:
        self._dn = dn or ""
        self._attributes = attributes
        self._names = {str(k).lower(): k for k in attributes.keys()}

    @classmethod
    def from_ldap(cls, entry: Any) -> "DirectoryEntry":
        """Build from an ldap3 ``Entry`` (``conn.entries[i]``)."""
        return cls(str(entry.entry_dn), dict(entry.entry_attributes_as_dict or {}))

    @classmethod
    def from_search_result(cls, result: Mapping[str, Any]) -> "DirectoryEntry":
        """Build from a paged_search response item (``searchResEntry``)."""
        attrs = dict(result.get("attributes") or {})
        dn = str(result.get("dn") or "") or str(attrs.get("distinguishedName") or "")
        return cls(dn, attrs)

    @property
    def dn(self) -> str:
        return self._dn

    def attribute_names(self) -> list[str]:
        return [str(k) for k in self._names.values()]

    def has(self, name: str) -> bool:
        return name.lower() in self._names

    def read(self, name: str) -> Any | None:
        key = self._names.get(name.lower())
        if key is None:
            return None
        try:
            return self._attributes[key]
        except Exception as e:
            raise AttributeReadFailure(name, str(e) or type(e).__name__) from e

    def read_text(self, name: str) -> str | None:
        """Attribute as text; multi-valued attributes are joined. Empty -> None."""
        raw = self.read(name)
        if raw is None:
            return None
        try:
            parts = [_text(v) for v in _values(raw)]
        except (UnicodeDecodeError, TypeError, ValueError) as e:
            raise AttributeReadFailure(name, type(e).__name__) from e
        text = MULTI_VALUE_SEPARATOR.join(p for p in parts if p)
        return text or None

    def read_bytes(self, name: str) -> bytes | None:
        """First value of a binary attribute. Non-binary values are a read failure."""
        raw = self.read(name)
        if raw is None:
            return None
        vals = _values(raw)
        if not vals:
            return None
        value = vals[0]
        if not isinstance(value, (bytes, bytearray)):
            raise AttributeReadFailure(name, f"expected bytes, got {type(value).__name__}")
        return bytes(value) or None
