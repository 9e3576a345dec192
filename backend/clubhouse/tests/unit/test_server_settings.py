from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from clubhouse.server.settings import ClubhouseSettings


class TestClubhouseSettings:
    def test_defaults(self, monkeypatch):
        for name in ("CLUBHOUSE_TIMEZONE", "CLUBHOUSE_CORS_ORIGINS", "CLUBHOUSE_STATIC_DIR"):
            monkeypatch.delenv(name, raising=False)
        settings = ClubhouseSettings()

        assert settings.timezone == "Asia/Kolkata"
        assert settings.venue_tz == ZoneInfo("Asia/Kolkata")
        assert settings.cors_origins == []
        assert settings.max_players_per_game == 8
        assert settings.default_weekday_price == Decimal("60.00")
        assert settings.default_weekend_price == Decimal("80.00")
        assert settings.recent_games_limit == 10
        assert settings.max_report_days == 366

    def test_cors_origins_csv(self, monkeypatch):
        monkeypatch.setenv("CLUBHOUSE_CORS_ORIGINS", "http://desk.local,http://office.local")
        assert ClubhouseSettings().cors_origins == ["http://desk.local", "http://office.local"]

    def test_cors_origins_json_array(self, monkeypatch):
        monkeypatch.setenv("CLUBHOUSE_CORS_ORIGINS", '["http://desk.local"]')
        assert ClubhouseSettings().cors_origins == ["http://desk.local"]

    def test_prices_from_env(self, monkeypatch):
        monkeypatch.setenv("CLUBHOUSE_DEFAULT_WEEKDAY_PRICE", "75.50")
        assert ClubhouseSettings().default_weekday_price == Decimal("75.50")

    def test_unknown_timezone_fails_at_start(self, monkeypatch):
        monkeypatch.setenv("CLUBHOUSE_TIMEZONE", "Mars/Olympus_Mons")
        with pytest.raises(ValidationError, match="Unknown time zone"):
            ClubhouseSettings()

    @pytest.mark.parametrize(
        "name",
        ["CLUBHOUSE_MAX_PLAYERS_PER_GAME", "CLUBHOUSE_RECENT_GAMES_LIMIT", "CLUBHOUSE_MAX_REPORT_DAYS"],
    )
    def test_non_positive_limits_rejected(self, monkeypatch, name):
        monkeypatch.setenv(name, "0")
        with pytest.raises(ValidationError):
            ClubhouseSettings()

    def test_negative_default_price_rejected(self, monkeypatch):
        monkeypatch.setenv("CLUBHOUSE_DEFAULT_WEEKEND_PRICE", "-1")
        with pytest.raises(ValidationError, match="default_weekend_price"):
            ClubhouseSettings()
