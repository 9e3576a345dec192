"""Admin session lifecycle, pricing management and the demo-number registry over HTTP."""

from __future__ import annotations

import pytest

from clubhouse.auth.backend import SESSION_COOKIE_NAME

ADMIN_ROUTES = [
    ("POST", "/api/admin/logout"),
    ("GET", "/api/admin/me"),
    ("GET", "/api/admin/dashboard-stats"),
    ("GET", "/api/admin/recent-games"),
    ("GET", "/api/admin/sales/day"),
    ("GET", "/api/admin/hourly-sales"),
    ("GET", "/api/admin/weekly-sales"),
    ("GET", "/api/admin/monthly-sales"),
    ("GET", "/api/admin/custom-sales"),
    ("GET", "/api/admin/transactions"),
    ("POST", "/api/admin/pricing"),
    ("GET", "/api/admin/pricing-history"),
    ("GET", "/api/admin/demo-numbers"),
    ("POST", "/api/admin/demo-numbers"),
    ("DELETE", "/api/admin/demo-numbers/some-id"),
]


class TestAuthRequired:
    @pytest.mark.parametrize(("method", "path"), ADMIN_ROUTES)
    def test_anonymous_requests_get_json_401(self, client, method, path):
        response = client.request(method, path)
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_trailing_slash_does_not_bypass_auth(self, client):
        response = client.get("/api/admin/me/", follow_redirects=False)
        assert response.status_code == 401

    def test_forged_cookie_is_rejected(self, client):
        client.cookies.set(SESSION_COOKIE_NAME, "forged")
        assert client.get("/api/admin/me").status_code == 401


class TestLogin:
    def test_login_sets_http_only_cookie(self, client, admin_credentials):
        response = client.post("/api/admin/login", json=admin_credentials)

        assert response.status_code == 200
        assert response.json()["message"] == "Login successful"
        assert response.json()["user"]["username"] == admin_credentials["username"]
        set_cookie = response.headers["set-cookie"]
        assert f"{SESSION_COOKIE_NAME}=" in set_cookie
        assert "httponly" in set_cookie.lower()
        assert "samesite=lax" in set_cookie.lower()

    def test_username_is_case_insensitive(self, client, admin_credentials):
        payload = {**admin_credentials, "username": admin_credentials["username"].upper()}
        response = client.post("/api/admin/login", json=payload)
        assert response.status_code == 200

    @pytest.mark.parametrize(
        "override",
        [{"password": "wrong-password"}, {"username": "nobody"}],
    )
    def test_bad_credentials_are_401(self, client, admin_credentials, override):
        response = client.post("/api/admin/login", json={**admin_credentials, **override})
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid credentials"}
        assert SESSION_COOKIE_NAME not in response.cookies

    def test_missing_password_is_400(self, client, admin_credentials):
        assert client.post("/api/admin/login", json={"username": admin_credentials["username"]}).status_code == 400

    def test_me_and_logout(self, admin_client, admin_credentials):
        me = admin_client.get("/api/admin/me")
        assert me.status_code == 200
        assert me.json()["username"] == admin_credentials["username"]

        assert admin_client.post("/api/admin/logout").status_code == 200
        assert admin_client.get("/api/admin/me").status_code == 401

    def test_me_rejects_session_of_removed_admin(self, admin_client):
        admin_client.app.state.db.connection.execute("DELETE FROM admin_users")

        response = admin_client.get("/api/admin/me")

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}
        assert admin_client.get("/api/admin/pricing-history").status_code == 401


class TestPricingManagement:
    def test_update_appends_history_and_changes_current_rate(self, admin_client):
        me = admin_client.get("/api/admin/me").json()
        response = admin_client.post("/api/admin/pricing", json={"weekdayPrice": 70, "weekendPrice": "95.5"})

        assert response.status_code == 201
        rate = response.json()
        assert (rate["weekdayPrice"], rate["weekendPrice"]) == ("70.00", "95.50")
        assert rate["updatedBy"] == me["id"]

        assert admin_client.get("/api/pricing").json()["id"] == rate["id"]
        history = admin_client.get("/api/admin/pricing-history").json()["rates"]
        assert [r["updatedBy"] for r in history] == [me["id"], "system"]

    @pytest.mark.parametrize(
        "payload",
        [
            {"weekdayPrice": -1, "weekendPrice": 80},
            {"weekdayPrice": "60.001", "weekendPrice": 80},
            {"weekdayPrice": "sixty", "weekendPrice": 80},
            {"weekdayPrice": 60},
            {"weekdayPrice": 60, "weekendPrice": 80, "currency": "INR"},
        ],
    )
    def test_invalid_rates_are_400_and_not_stored(self, admin_client, payload):
        response = admin_client.post("/api/admin/pricing", json=payload)

        assert response.status_code == 400
        assert len(admin_client.get("/api/admin/pricing-history").json()["rates"]) == 1


class TestDemoNumbers:
    def test_add_list_and_remove(self, admin_client):
        created = admin_client.post("/api/admin/demo-numbers", json={"phoneNumber": "+91 80159-89208"})
        assert created.status_code == 201
        assert created.json()["phoneNumber"] == "8015989208"

        listing = admin_client.get("/api/admin/demo-numbers").json()["demoNumbers"]
        assert [entry["phoneNumber"] for entry in listing] == ["8015989208"]

        removed = admin_client.delete(f"/api/admin/demo-numbers/{created.json()['id']}")
        assert removed.status_code == 204
        assert admin_client.get("/api/admin/demo-numbers").json()["demoNumbers"] == []

    def test_duplicate_is_400(self, admin_client):
        admin_client.post("/api/admin/demo-numbers", json={"phoneNumber": "8015989208"})
        response = admin_client.post("/api/admin/demo-numbers", json={"phoneNumber": "918015989208"})
        assert response.status_code == 400

    def test_number_without_digits_is_400(self, admin_client):
        assert admin_client.post("/api/admin/demo-numbers", json={"phoneNumber": "none"}).status_code == 400

    def test_remove_unknown_is_404(self, admin_client):
        assert admin_client.delete("/api/admin/demo-numbers/missing").status_code == 404
