from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class TokenResponse(BaseModel):
    token: str
    expires_in: int
    token_type: str = "Bearer"


class ConfigurationRequest(BaseModel):
    value: str = ""
    # имя переменной окружения для сниппета (например AD_ENCRYPTED_PASSWORD)
    setting: str = Field(default="", max_length=128)


class EncryptionKeysResponse(_CamelModel):
    key: str
    iv: str
    config_snippet: str


class EncryptionResponse(_CamelModel):
    original_value: str
    encrypted_value: str
    config_snippet: str


class DecryptionResponse(_CamelModel):
    decrypted_value: str
