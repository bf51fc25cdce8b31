from functools import lru_cache
from typing import Dict

from pydantic_settings import BaseSettings
from pydantic import Field


class EnvSettings(BaseSettings):
    app_name: str = Field("ADSoft API", alias="APP_NAME")

    # Шифрование (base64, AES-256 ключ + 16-байтовый IV)
    encryption_key: str = Field("", alias="ENCRYPTION_KEY")
    encryption_iv: str = Field("", alias="ENCRYPTION_IV")

    # AD
    ad_domain: str = Field("", alias="AD_DOMAIN")
    ad_dc: str = Field("", alias="AD_DC")
    ad_port: int = Field(636, alias="AD_PORT")
    ad_use_ssl: bool = Field(True, alias="AD_USE_SSL")
    ad_starttls: bool = Field(False, alias="AD_STARTTLS")
    ad_tls_validate: bool = Field(False, alias="AD_TLS_VALIDATE")
    ad_ca_cert_file: str = Field("", alias="AD_CA_CERT_FILE")
    ad_timeout_s: float = Field(10.0, alias="AD_TIMEOUT_S")
    ad_encrypted_username: str = Field("", alias="AD_ENCRYPTED_USERNAME")
    ad_encrypted_password: str = Field("", alias="AD_ENCRYPTED_PASSWORD")
    ad_localized_name_attribute: str = Field("displayNameAr", alias="AD_LOCALIZED_NAME_ATTRIBUTE")
    ad_photo_attribute: str = Field("thumbnailPhoto", alias="AD_PHOTO_ATTRIBUTE")

    # Клиенты API
    api_keys: Dict[str, str] = Field(default_factory=dict, alias="API_KEYS")  # JSON: {"client": "key"}
    token_secret: str = Field("", alias="TOKEN_SECRET")
    token_ttl_minutes: int = Field(60, alias="TOKEN_TTL_MINUTES")
    config_endpoints_require_auth: bool = Field(True, alias="CONFIG_ENDPOINTS_REQUIRE_AUTH")

    # Логирование
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_dir: str = Field("data/logs", alias="LOG_DIR")
    log_retention_days: int = Field(30, alias="LOG_RETENTION_DAYS")

    class Config:
        populate_by_name = True
        env_file = ".env"
        extra = "ignore"


@lru_cache(maxsize=1)
def get_env() -> EnvSettings:
    return EnvSettings()
