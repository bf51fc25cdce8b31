"""Test the HTTP endpoints end to end with a fake directory."""

import base64

from fastapi.testclient import TestClient

from adsoft_api.crypto import SecretCipher
from adsoft_api.env_settings import EnvSettings
from adsoft_api.main import create_app

from .support import API_KEY, PHOTO, FakeDirectoryClient


def test_health(client: TestClient) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_issue_token(client: TestClient) -> None:
    r = client.post("/api/auth/token", headers={"X-API-Key": API_KEY})
    assert r.status_code == 200
    data = r.json()
    assert data["token_type"] == "Bearer"
    assert data["expires_in"] == 30 * 60
    assert data["token"]


def test_issue_token_invalid_key(client: TestClient) -> None:
    assert client.post("/api/auth/token").status_code == 401
    r = client.post("/api/auth/token", headers={"X-API-Key": "wrong"})
    assert r.status_code == 401
    assert r.json()["detail"] == "Invalid API key"


def test_user_details(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.get("/api/aduser/jdoe", headers=auth_headers)
    assert r.status_code == 200
    data = r.json()
    assert data["accountName"] == "jdoe"
    assert data["email"] == "jane.doe@corp.local"
    assert data["displayName"] == "Jane Doe"
    assert data["displayNameLocalized"] == "جين دو"
    assert base64.b64decode(data["profileImage"]) == PHOTO
    assert data["extendedAttributes"]["department"] == "Sales"


def test_user_details_not_found(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.get("/api/aduser/nobody", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "User nobody not found"


def test_user_details_requires_token_and_api_key(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.get("/api/aduser/jdoe", headers={"X-API-Key": API_KEY})
    assert r.status_code == 401

    r = client.get("/api/aduser/jdoe", headers={"Authorization": auth_headers["Authorization"]})
    assert r.status_code == 401

    r = client.get(
        "/api/aduser/jdoe",
        headers={"Authorization": auth_headers["Authorization"], "X-API-Key": "wrong"},
    )
    assert r.status_code == 401

    r = client.get("/api/aduser/jdoe", headers={"Authorization": "Bearer forged", "X-API-Key": API_KEY})
    assert r.status_code == 401


def test_user_details_upstream_error(
    client: TestClient, auth_headers: dict[str, str], directory: FakeDirectoryClient
) -> None:
    directory.fail = True
    r = client.get("/api/aduser/jdoe", headers=auth_headers)
    assert r.status_code == 502
    assert "socket" not in r.text


def test_users_by_ou(client: TestClient, auth_headers: dict[str, str], directory: FakeDirectoryClient) -> None:
    r = client.get("/api/aduser/ou/Sales", headers=auth_headers)
    assert r.status_code == 200
    users = r.json()
    assert [u["accountName"] for u in users] == ["jdoe", "broe", "skoe"]
    assert all(u["extendedAttributes"] == {} for u in users)
    assert directory.calls == ["list_user_principals"]


def test_users_by_ou_not_found(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.get("/api/aduser/ou/Finance", headers=auth_headers)
    assert r.status_code == 404
    assert r.json()["detail"] == "No users found in OU: Finance"


def test_users_by_ou_upstream_error(
    client: TestClient, auth_headers: dict[str, str], directory: FakeDirectoryClient
) -> None:
    directory.fail = True
    assert client.get("/api/aduser/ou/Sales", headers=auth_headers).status_code == 502


def test_generate_keys(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.get("/api/configuration/generate-keys", headers=auth_headers)
    assert r.status_code == 200
    data = r.json()
    assert len(base64.b64decode(data["key"])) == 32
    assert len(base64.b64decode(data["iv"])) == 16
    assert data["configSnippet"] == f"ENCRYPTION_KEY={data['key']}\nENCRYPTION_IV={data['iv']}"


def test_encrypt(client: TestClient, auth_headers: dict[str, str], cipher: SecretCipher) -> None:
    r = client.post(
        "/api/configuration/encrypt",
        json={"value": "P@ssw0rd!", "setting": "AD_ENCRYPTED_PASSWORD"},
        headers=auth_headers,
    )
    assert r.status_code == 200
    data = r.json()
    assert data["originalValue"] == "P@ssw0rd!"
    assert data["encryptedValue"] == cipher.encrypt("P@ssw0rd!")
    assert data["configSnippet"] == f"AD_ENCRYPTED_PASSWORD={data['encryptedValue']}"


def test_encrypt_empty_value(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.post("/api/configuration/encrypt", json={"value": ""}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Value to encrypt cannot be empty"


def test_decrypt(client: TestClient, auth_headers: dict[str, str], cipher: SecretCipher) -> None:
    r = client.post(
        "/api/configuration/decrypt",
        json={"value": cipher.encrypt("secret123")},
        headers=auth_headers,
    )
    assert r.status_code == 200
    assert r.json() == {"decryptedValue": "secret123"}


def test_decrypt_failures(client: TestClient, auth_headers: dict[str, str]) -> None:
    r = client.post("/api/configuration/decrypt", json={"value": ""}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Value to decrypt cannot be empty"

    r = client.post("/api/configuration/decrypt", json={"value": "not base64!!"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["detail"] == "Failed to decrypt value"
    assert "not base64" not in r.text


def test_configuration_requires_token(client: TestClient) -> None:
    assert client.get("/api/configuration/generate-keys").status_code == 401
    assert client.post("/api/configuration/encrypt", json={"value": "x"}).status_code == 401


def test_configuration_open_when_auth_disabled(env: EnvSettings, directory: FakeDirectoryClient) -> None:
    env = env.model_copy(update={"config_endpoints_require_auth": False})
    client = TestClient(create_app(env, directory_client=directory))
    assert client.get("/api/configuration/generate-keys").status_code == 200
    # поиск пользователей по-прежнему требует токен
    assert client.get("/api/aduser/jdoe", headers={"X-API-Key": API_KEY}).status_code == 401
