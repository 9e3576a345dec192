"""Application fixtures for clubhouse API tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from starlette.testclient import TestClient

from clubhouse.server.app import create_app
from clubhouse.server.settings import ClubhouseSettings
from shared.auth.settings import AuthSettings

if TYPE_CHECKING:
    from pathlib import Path

ADMIN_USERNAME = "manager"
ADMIN_PASSWORD = "putting-green"  # noqa: S105


@pytest.fixture
def settings(tmp_path: Path) -> ClubhouseSettings:
    return ClubhouseSettings(
        database_path=str(tmp_path / "clubhouse.db"),
        static_dir=str(tmp_path / "no-client"),
        timezone="UTC",
    )


@pytest.fixture
def auth_settings() -> AuthSettings:
    return AuthSettings(password_hasher="simple", admin_username=ADMIN_USERNAME, admin_password=ADMIN_PASSWORD)


@pytest.fixture
def client(settings: ClubhouseSettings, auth_settings: AuthSettings):
    with TestClient(create_app(settings=settings, auth_settings=auth_settings)) as test_client:
        yield test_client


@pytest.fixture
def admin_credentials() -> dict[str, str]:
    return {"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}


@pytest.fixture
def admin_client(client: TestClient, admin_credentials: dict[str, str]) -> TestClient:
    response = client.post("/api/admin/login", json=admin_credentials)
    assert response.status_code == 200
    return client


@pytest.fixture
def player_id(client: TestClient) -> str:
    response = client.post("/api/players", json={"name": "Asha", "contact": "+91 98450 12345"})
    assert response.status_code == 201
    return response.json()["id"]
