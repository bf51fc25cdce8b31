"""Application bootstrap module.

Everything that must succeed before the API accepts requests: key material,
bind credentials, directory gateway configuration. Any failure here raises
ConfigurationError and the process does not start.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from .ad import ADClient, ADConfig, DirectoryUserProjector, ProjectionPolicy
from .crypto import EncryptionKeyMaterial, SecretCipher
from .env_settings import EnvSettings
from .exceptions import ConfigurationError
from .services import DirectoryGateway, DirectoryService, SecretCodec
from .session import TokenIssuer
from .vault import CredentialVault

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Components:
    cipher: SecretCipher
    codec: SecretCodec
    directory_service: DirectoryService
    token_issuer: TokenIssuer


def projection_policy(env: EnvSettings) -> ProjectionPolicy:
    return ProjectionPolicy(
        localized_name_attribute=env.ad_localized_name_attribute,
        photo_attribute=env.ad_photo_attribute,
    )


def build_directory_client(env: EnvSettings, cipher: SecretCipher, policy: ProjectionPolicy) -> ADClient:
    domain = (env.ad_domain or "").strip()
    if not domain:
        raise ConfigurationError("AD_DOMAIN configuration is missing")

    log.info("Инициализация сервиса Active Directory для домена: %s", domain)
    creds = CredentialVault(cipher).unlock(env.ad_encrypted_username, env.ad_encrypted_password)

    cfg = ADConfig(
        dc=env.ad_dc,
        domain=domain,
        port=env.ad_port,
        use_ssl=env.ad_use_ssl,
        starttls=env.ad_starttls,
        bind_username=creds.username,
        bind_password=creds.password,
        tls_validate=env.ad_tls_validate,
        ca_cert_file=env.ad_ca_cert_file,
        timeout_s=env.ad_timeout_s,
    )
    if not cfg.base_dn:
        raise ConfigurationError(f"AD_DOMAIN must be a DNS domain name, got {domain!r}")

    return ADClient(cfg, list_attributes=policy.mapped_attributes())


def initialize_application(env: EnvSettings, directory_client: DirectoryGateway | None = None) -> Components:
    """Build the immutable, process-wide components."""
    cipher = SecretCipher(EncryptionKeyMaterial.from_base64(env.encryption_key, env.encryption_iv))

    if not env.token_secret:
        raise ConfigurationError("TOKEN_SECRET configuration is missing")
    if not env.api_keys:
        log.warning("API_KEYS пуст: запросы к пользователям AD будут отклоняться")

    policy = projection_policy(env)
    client = directory_client or build_directory_client(env, cipher, policy)

    return Components(
        cipher=cipher,
        codec=SecretCodec(cipher),
        directory_service=DirectoryService(client, DirectoryUserProjector(policy)),
        token_issuer=TokenIssuer(env.token_secret, env.token_ttl_minutes),
    )
