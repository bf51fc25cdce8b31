from __future__ import annotations

from typing import Iterable, Protocol, TypeVar


class HasDN(Protocol):
    @property
    def dn(self) -> str: ...


P = TypeVar("P", bound=HasDN)


def escape_ldap_filter_value(value: str) -> str:
    """RFC 4515 escaping for LDAP filter values."""
    out: list[str] = []
    for ch in value:
        if ch == "\\":
            out.append("\\5c")
        elif ch == "*":
            out.append("\\2a")
        elif ch == "(":
            out.append("\\28")
        elif ch == ")":
            out.append("\\29")
        elif ch == "\x00":
            out.append("\\00")
        else:
            out.append(ch)
    return "".join(out)


def domain_to_base_dn(domain: str) -> str:
    domain = (domain or "").strip().strip(".")
    if not domain or "." not in domain:
        return ""
    parts = [p for p in domain.split(".") if p]
    return ",".join([f"DC={p}" for p in parts])


def filter_by_ou(principals: Iterable[P], ou_name: str) -> list[P]:
    """Keep principals whose DN contains ``OU=<ou_name>``.

    Plain case-sensitive substring test: ``OU=Sales`` also matches
    ``OU=SalesEast``. Callers rely on this loose match.
    """
    needle = f"OU={ou_name}"
    return [p for p in principals if needle in (p.dn or "")]
