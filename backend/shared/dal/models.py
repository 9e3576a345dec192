"""Persistence models for the data access layer."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field


class Player(BaseModel, frozen=True):
    """Identity captured at registration. Immutable once created."""

    player_id: str
    name: str
    contact: str  # free-form, normalized only for demo-number matching
    email: str | None = None
    created_at: datetime


class Game(BaseModel, frozen=True):
    """One round at the venue. Cost is frozen at creation time."""

    game_id: str
    player_id: str  # registering player
    player_names: list[str] = Field(min_length=1)  # registering player first, then guests
    player_count: int
    total_cost: Decimal
    is_weekend: bool
    is_demo_game: bool = False
    created_at: datetime
    completed_at: datetime  # backfilled when scores are appended


class Score(BaseModel, frozen=True):
    """Strokes for one player on one hole (often a single total row per player)."""

    score_id: str
    game_id: str
    player_name: str
    hole: int = 1
    strokes: int


class Rate(BaseModel, frozen=True):
    """Per-player prices effective from updated_at until superseded."""

    rate_id: str
    weekday_price: Decimal
    weekend_price: Decimal
    updated_at: datetime
    updated_by: str  # admin user id, or "system" for the seeded default


class DemoPhoneNumber(BaseModel, frozen=True):
    demo_id: str
    phone_number: str  # normalized: digits only, country code stripped
    added_at: datetime


class SaleEntry(BaseModel, frozen=True):
    """Reporting projection of a non-demo game."""

    completed_at: datetime
    total_cost: Decimal
    player_count: int
