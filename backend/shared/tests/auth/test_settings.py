import pytest
from pydantic import ValidationError

from shared.auth.session_store import DEFAULT_SESSION_TTL_SECONDS
from shared.auth.settings import AuthSettings


class TestAuthSettings:
    def test_defaults(self, monkeypatch):
        for name in ("AUTH_PASSWORD_HASHER", "AUTH_COOKIE_SECURE", "AUTH_ADMIN_PASSWORD"):
            monkeypatch.delenv(name, raising=False)
        settings = AuthSettings()
        assert settings.password_hasher == "bcrypt"
        assert settings.cookie_secure is False
        assert settings.session_ttl_seconds == DEFAULT_SESSION_TTL_SECONDS
        assert settings.admin_username == "admin"
        assert settings.admin_password is None

    def test_reads_bootstrap_admin_from_env(self, monkeypatch):
        monkeypatch.setenv("AUTH_ADMIN_USERNAME", "manager")
        monkeypatch.setenv("AUTH_ADMIN_PASSWORD", "putting-green")
        settings = AuthSettings()
        assert settings.admin_username == "manager"
        assert settings.admin_password == "putting-green"

    def test_unknown_hasher_rejected(self, monkeypatch):
        monkeypatch.setenv("AUTH_PASSWORD_HASHER", "md5")
        with pytest.raises(ValidationError, match="password_hasher"):
            AuthSettings()

    def test_non_positive_ttl_rejected(self, monkeypatch):
        monkeypatch.setenv("AUTH_SESSION_TTL_SECONDS", "0")
        with pytest.raises(ValidationError, match="session_ttl_seconds"):
            AuthSettings()
