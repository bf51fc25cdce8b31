from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from adsoft_api.crypto import EncryptionKeyMaterial, SecretCipher
from adsoft_api.env_settings import EnvSettings
from adsoft_api.main import create_app

from .support import API_KEY, ZERO_IV, ZERO_KEY, FakeDirectoryClient, make_jane, sample_principals


@pytest.fixture
def cipher() -> SecretCipher:
    return SecretCipher(EncryptionKeyMaterial.from_base64(ZERO_KEY, ZERO_IV))


@pytest.fixture
def env() -> EnvSettings:
    return EnvSettings(
        encryption_key=ZERO_KEY,
        encryption_iv=ZERO_IV,
        ad_domain="corp.local",
        token_secret="test-token-secret",
        token_ttl_minutes=30,
        api_keys={"portal": API_KEY},
        config_endpoints_require_auth=True,
        log_dir="",
        log_level="DEBUG",
    )


@pytest.fixture
def directory() -> FakeDirectoryClient:
    return FakeDirectoryClient(users={"jdoe": make_jane()}, principals=sample_principals())


@pytest.fixture
def client(env: EnvSettings, directory: FakeDirectoryClient) -> TestClient:
    app = create_app(env, directory_client=directory)
    return TestClient(app)


@pytest.fixture
def auth_headers(client: TestClient) -> dict[str, str]:
    r = client.post("/api/auth/token", headers={"X-API-Key": API_KEY})
    assert r.status_code == 200
    token = r.json()["token"]
    return {"Authorization": f"Bearer {token}", "X-API-Key": API_KEY}
