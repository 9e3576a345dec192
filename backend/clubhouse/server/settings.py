"""Clubhouse server configuration via environment variables."""

from __future__ import annotations

from decimal import Decimal
from typing import TYPE_CHECKING
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from clubhouse.games.types import DEFAULT_MAX_PLAYERS
from shared.validators import StringListEnvSettingsSource, parse_string_list

if TYPE_CHECKING:
    from pydantic_settings.sources.base import PydanticBaseSettingsSource


class ClubhouseSettings(BaseSettings):
    model_config = {"env_prefix": "CLUBHOUSE_"}

    database_path: str = "backend/storage/clubhouse.db"
    log_dir: str = "backend/logs/clubhouse"
    cors_origins: list[str] = []
    static_dir: str = "frontend/dist"

    # IANA name of the venue clock; reports bucket by local hour and day
    timezone: str = "Asia/Kolkata"

    max_players_per_game: int = Field(default=DEFAULT_MAX_PLAYERS, gt=0)
    default_weekday_price: Decimal = Field(default=Decimal("60.00"), ge=0, decimal_places=2)
    default_weekend_price: Decimal = Field(default=Decimal("80.00"), ge=0, decimal_places=2)
    recent_games_limit: int = Field(default=10, gt=0)
    max_report_days: int = Field(default=366, gt=0)

    @field_validator("cors_origins", mode="before")
    @classmethod
    def validate_cors_origins(cls, v: str | list[str]) -> list[str]:
        return parse_string_list(v)

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: str) -> str:
        try:
            ZoneInfo(v)
        except (ZoneInfoNotFoundError, ValueError):
            raise ValueError(f"Unknown time zone '{v}'") from None
        return v

    @property
    def venue_tz(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (init_settings, StringListEnvSettingsSource(settings_cls), dotenv_settings, file_secret_settings)
