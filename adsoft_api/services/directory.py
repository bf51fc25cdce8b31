from __future__ import annotations

import logging
from typing import Optional, Protocol

from ..ad import DirectoryEntry, DirectoryUserProjector, DirectoryUserRecord, filter_by_ou
from ..exceptions import UpstreamDirectoryError

log = logging.getLogger(__name__)


class DirectoryGateway(Protocol):
    def find_user(self, account_name: str) -> tuple[bool, str, Optional[DirectoryEntry]]: ...

    def list_user_principals(self) -> tuple[bool, str, list[DirectoryEntry]]: ...


class DirectoryService:
    def __init__(self, client: DirectoryGateway, projector: DirectoryUserProjector) -> None:
        self.client = client
        self.projector = projector

    def get_user_details(self, account_name: str) -> DirectoryUserRecord | None:
        log.info("Поиск пользователя AD: %s", account_name)

        ok, msg, entry = self.client.find_user(account_name)
        if not ok:
            log.error("Ошибка получения пользователя %s из AD: %s", account_name, msg)
            raise UpstreamDirectoryError(msg)
        if entry is None:
            log.warning("Пользователь не найден: %s", account_name)
            return None

        record = self.projector.project(entry, include_extended=True)
        if record is None:
            log.warning("У записи %s нет имени учётной записи", entry.dn)
            return None

        log.info("Пользователь найден: %s", record.account_name)
        return record

    def get_users_by_ou(self, ou_name: str) -> list[DirectoryUserRecord]:
        log.info("Поиск пользователей в OU: %s", ou_name)

        ok, msg, principals = self.client.list_user_principals()
        if not ok:
            log.error("Ошибка получения пользователей OU %s из AD: %s", ou_name, msg)
            raise UpstreamDirectoryError(msg)

        users: list[DirectoryUserRecord] = []
        for entry in filter_by_ou(principals, ou_name):
            # Дополнительные атрибуты в выборке по OU не заполняются
            record = self.projector.project(entry, include_extended=False)
            if record is not None:
                users.append(record)

        log.info("Найдено %d пользователей в OU: %s", len(users), ou_name)
        return users
