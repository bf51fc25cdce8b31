from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .utils import domain_to_base_dn


@dataclass(frozen=True)
class ADConfig:
    dc: str
    domain: str
    port: int
    use_ssl: bool
    starttls: bool
    bind_username: str
    bind_password: str = field(repr=False)
    tls_validate: bool = False
    ca_cert_file: str = ""
    timeout_s: float = 10.0

    @property
    def host(self) -> str:
        dc = (self.dc or "").strip()
        domain = (self.domain or "").strip().strip(".")
        if not dc:
            return domain
        try:
            ipaddress.ip_address(dc)
            return dc
        except ValueError:
            pass
        if "." in dc:
            return dc
        return f"{dc}.{domain}" if domain else dc

    @property
    def base_dn(self) -> str:
        return domain_to_base_dn(self.domain)

    @property
    def bind_principal(self) -> str:
        u = (self.bind_username or "").strip()
        d = (self.domain or "").strip().strip(".")
        if not u:
            return ""
        # UPN или NetBIOS-форма (DOMAIN\user) передаются как есть
        if "@" in u or "\\" in u:
            return u
        return f"{u}@{d}" if d else u


class DirectoryUserRecord(BaseModel):
    """One directory identity as returned by the lookup endpoints."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    account_name: str
    email: Optional[str] = None
    display_name: Optional[str] = None
    display_name_localized: Optional[str] = None
    profile_image: Optional[str] = None  # base64
    extended_attributes: Dict[str, str] = Field(default_factory=dict)
