"""Application wiring: health, error mapping, static client mount, startup seeding."""

from __future__ import annotations

from unittest.mock import AsyncMock

from starlette.testclient import TestClient

from clubhouse.server.app import STORE_ERROR_MESSAGE, create_app
from shared.auth.settings import AuthSettings
from shared.errors import StoreError


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_security_headers_on_api_responses(client):
    response = client.get("/api/pricing")
    assert response.headers["x-content-type-options"] == "nosniff"
    assert response.headers["x-frame-options"] == "DENY"
    assert "content-security-policy" in response.headers


def test_store_failure_is_500_without_driver_text(client):
    client.app.state.rate_table.get_current_rate = AsyncMock(
        side_effect=StoreError("disk I/O error at /var/lib/clubhouse.db"),
    )

    response = client.get("/api/pricing")

    assert response.status_code == 500
    assert response.json() == {"error": STORE_ERROR_MESSAGE}


def test_missing_rate_is_configuration_error(client, player_id):
    client.app.state.db.connection.execute("DELETE FROM rates")

    assert client.get("/api/pricing").json() == {"error": "Pricing not configured"}
    response = client.post(
        "/api/games",
        json={"playerId": player_id, "playerNames": ["Asha"], "playerCount": 1, "isWeekend": False},
    )
    assert response.status_code == 400
    assert response.json() == {"error": "Pricing not configured"}


def test_unknown_api_route_is_json_404(client):
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert "error" in response.json()


def test_serves_client_build_when_present(settings, auth_settings, tmp_path):
    client_dir = tmp_path / "dist"
    client_dir.mkdir()
    (client_dir / "index.html").write_text("<html>clubhouse</html>")
    settings = settings.model_copy(update={"static_dir": str(client_dir)})

    with TestClient(create_app(settings=settings, auth_settings=auth_settings)) as client:
        assert "clubhouse" in client.get("/").text
        assert client.get("/api/pricing").status_code == 200


def test_startup_seeding_is_idempotent(settings):
    auth_settings = AuthSettings(password_hasher="simple", admin_username="owner", admin_password="first-password")
    with TestClient(create_app(settings=settings, auth_settings=auth_settings)):
        pass

    again = AuthSettings(password_hasher="simple", admin_username="owner", admin_password="second-password")
    with TestClient(create_app(settings=settings, auth_settings=again)) as client:
        assert client.get("/api/pricing").json()["updatedBy"] == "system"
        login = client.post("/api/admin/login", json={"username": "owner", "password": "first-password"})
        assert login.status_code == 200
        rates = client.get("/api/admin/pricing-history").json()["rates"]
        assert len(rates) == 1


def test_no_bootstrap_admin_without_password(settings, monkeypatch):
    monkeypatch.delenv("AUTH_ADMIN_PASSWORD", raising=False)
    with TestClient(create_app(settings=settings, auth_settings=AuthSettings(password_hasher="simple"))) as client:
        response = client.post("/api/admin/login", json={"username": "admin", "password": "anything-at-all"})
        assert response.status_code == 401
