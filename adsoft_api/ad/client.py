from __future__ import annotations

import logging
import ssl
from typing import Any, Optional

from ldap3 import (
    Server,
    Connection,
    ALL,
    SUBTREE,
    Tls,
    ALL_ATTRIBUTES,
)
from ldap3.core.exceptions import LDAPException

from .entry import DirectoryEntry
from .models import ADConfig
from .utils import escape_ldap_filter_value

log = logging.getLogger(__name__)

USER_FILTER = "(&(objectCategory=person)(objectClass=user))"


class ADClient:
    def __init__(self, cfg: ADConfig, list_attributes: list[str] | None = None) -> None:
        self.cfg = cfg
        # Атрибуты для выборки по OU (без ALL_ATTRIBUTES — список может быть большим)
        self.list_attributes = list(list_attributes or ["sAMAccountName", "mail", "displayName"])
        if "distinguishedName" not in self.list_attributes:
            self.list_attributes.append("distinguishedName")

        tls_kwargs: dict[str, Any] = {
            "validate": ssl.CERT_REQUIRED if cfg.tls_validate else ssl.CERT_NONE,
        }
        # Apply custom CA only when verification is enabled.
        if cfg.tls_validate and cfg.ca_cert_file:
            tls_kwargs["ca_certs_file"] = cfg.ca_cert_file

        tls = Tls(**tls_kwargs)

        self.server = Server(
            host=cfg.host,
            port=cfg.port,
            use_ssl=cfg.use_ssl,
            get_info=ALL,
            tls=tls,
            connect_timeout=float(cfg.timeout_s),
        )

    def _conn(self, user: str, password: str) -> Connection:
        conn = Connection(
            self.server,
            user=user,
            password=password,
            auto_bind=False,
            receive_timeout=float(self.cfg.timeout_s),
        )
        conn.open()
        if self.cfg.starttls:
            conn.start_tls()
        return conn

    def _known_attributes(self, conn: Connection) -> list[str]:
        """Drop requested attributes the directory schema does not define.

        ldap3 checks attribute names against the loaded schema and fails the
        whole search on an unknown one (e.g. displayNameAr without the schema
        extension).
        """
        schema = conn.server.schema
        if schema is None:
            return list(self.list_attributes)

        defined = {str(name).lower() for name in schema.attribute_types}
        known = [a for a in self.list_attributes if a.lower() in defined]
        missing = [a for a in self.list_attributes if a.lower() not in defined]
        if missing:
            log.warning("Атрибуты отсутствуют в схеме каталога и не запрашиваются: %s", ", ".join(missing))
        return known

    @staticmethod
    def _unbind(conn: Connection | None) -> None:
        if conn is None:
            return
        try:
            conn.unbind()
        except LDAPException:
            pass

    def service_bind(self) -> tuple[bool, dict]:
        conn: Connection | None = None
        try:
            conn = self._conn(self.cfg.bind_principal, self.cfg.bind_password)
            ok = bool(conn.bind())
            res = dict(conn.result or {})
            return ok, res
        except LDAPException as e:
            return False, {"error": str(e), "description": str(e), "message": str(e)}
        finally:
            self._unbind(conn)

    def find_user(self, account_name: str) -> tuple[bool, str, Optional[DirectoryEntry]]:
        """Resolve one user by sAMAccountName with all of its attributes.

        Returns: (ok, message, entry); entry is None when nothing matched.
        """
        account_name = (account_name or "").strip()
        if not account_name:
            return True, "Empty account name.", None

        base = self.cfg.base_dn
        if not base:
            return False, "Base DN is empty (check AD_DOMAIN).", None

        conn: Connection | None = None
        try:
            conn = self._conn(self.cfg.bind_principal, self.cfg.bind_password)
            if not conn.bind():
                res = dict(conn.result or {})
                return False, f"Bind failed: {res.get('description', 'unknown error')}", None

            flt = f"(&(objectClass=user)(sAMAccountName={escape_ldap_filter_value(account_name)}))"
            conn.search(
                search_base=base,
                search_filter=flt,
                search_scope=SUBTREE,
                attributes=[ALL_ATTRIBUTES],
                size_limit=2,
            )
            if len(conn.entries) != 1:
                return True, f"User {account_name} not found.", None

            return True, "OK", DirectoryEntry.from_ldap(conn.entries[0])
        except LDAPException as e:
            return False, f"LDAP error: {e}", None
        finally:
            self._unbind(conn)

    def list_user_principals(self) -> tuple[bool, str, list[DirectoryEntry]]:
        """Return every user principal under the base DN (paged search).

        Returns: (ok, message, entries)
        """
        base = self.cfg.base_dn
        if not base:
            return False, "Base DN is empty (check AD_DOMAIN).", []

        conn: Connection | None = None
        try:
            conn = self._conn(self.cfg.bind_principal, self.cfg.bind_password)
            if not conn.bind():
                res = dict(conn.result or {})
                return False, f"Bind failed: {res.get('description', 'unknown error')}", []

            items: list[DirectoryEntry] = []
            for entry in conn.extend.standard.paged_search(
                search_base=base,
                search_filter=USER_FILTER,
                search_scope=SUBTREE,
                attributes=self._known_attributes(conn),
                paged_size=1000,
                generator=True,
            ):
                if entry.get("type") != "searchResEntry":
                    continue
                items.append(DirectoryEntry.from_search_result(entry))

            return True, "OK", items
        except LDAPException as e:
            return False, f"LDAP error: {e}", []
        finally:
            self._unbind(conn)
