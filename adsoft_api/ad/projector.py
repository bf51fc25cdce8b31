from __future__ import annotations

import base64
import logging
from dataclasses import dataclass
from typing import Callable, Optional, TypeVar

from ..exceptions import AttributeReadFailure
from .entry import DirectoryEntry
from .models import DirectoryUserRecord

log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class ProjectionPolicy:
    """Which directory attributes feed the typed fields of a user record."""

    account_attribute: str = "sAMAccountName"
    email_attribute: str = "mail"
    display_name_attribute: str = "displayName"
    localized_name_attribute: str = "displayNameAr"
    photo_attribute: str = "thumbnailPhoto"

    def mapped_attributes(self) -> list[str]:
        return [
            self.account_attribute,
            self.email_attribute,
            self.display_name_attribute,
            self.localized_name_attribute,
            self.photo_attribute,
        ]


def read_optional(entry: DirectoryEntry, name: str, reader: Callable[[str], Optional[T]]) -> Optional[T]:
    """Run one attribute read in its own failure domain: failure means absent."""
    try:
        return reader(name)
    except AttributeReadFailure as e:
        log.warning("Не удалось прочитать атрибут %s для %s: %s", name, entry.dn, e.reason)
        return None


class DirectoryUserProjector:
    def __init__(self, policy: ProjectionPolicy | None = None) -> None:
        self.policy = policy or ProjectionPolicy()

    def project(self, entry: DirectoryEntry, *, include_extended: bool = False) -> DirectoryUserRecord | None:
        """Map one raw directory entry to a user record.

        Returns None when the entry has no readable account name. Every other
        field is optional and read independently, so one bad attribute never
        fails the record.
        """
        p = self.policy

        account_name = read_optional(entry, p.account_attribute, entry.read_text)
        if not account_name:
            log.debug("Запись %s без %s, пропускаем", entry.dn, p.account_attribute)
            return None

        email = read_optional(entry, p.email_attribute, entry.read_text)
        display_name = read_optional(entry, p.display_name_attribute, entry.read_text)

        localized = read_optional(entry, p.localized_name_attribute, entry.read_text)
        if localized:
            log.debug("Найдено локализованное имя для %s", account_name)

        photo = read_optional(entry, p.photo_attribute, entry.read_bytes)
        profile_image = base64.b64encode(photo).decode("ascii") if photo else None
        if profile_image:
            log.debug("Найдено фото для %s", account_name)

        extended: dict[str, str] = {}
        if include_extended:
            extended = self._extended_attributes(entry, account_name)

        return DirectoryUserRecord(
            account_name=account_name,
            email=email,
            display_name=display_name,
            display_name_localized=localized,
            profile_image=profile_image,
            extended_attributes=extended,
        )

    def _extended_attributes(self, entry: DirectoryEntry, account_name: str) -> dict[str, str]:
        out: dict[str, str] = {}
        skipped = 0
        for name in entry.attribute_names():
            try:
                value = entry.read_text(name)
            except AttributeReadFailure as e:
                skipped += 1
                log.debug("Атрибут %s пользователя %s пропущен: %s", name, account_name, e.reason)
                continue
            if value:
                out[name] = value

        log.info(
            "Получено %d дополнительных атрибутов для %s (пропущено: %d)",
            len(out), account_name, skipped,
        )
        return out
