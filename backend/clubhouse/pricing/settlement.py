"""Settlement: the total cost of a game at creation time."""

from __future__ import annotations

from typing import TYPE_CHECKING

from shared.errors import ValidationError
from shared.money import quantize_money

if TYPE_CHECKING:
    from decimal import Decimal

    from shared.dal.models import Rate


class InvalidPlayerCountError(ValidationError):
    pass


def price_per_player(rate: Rate, *, is_weekend: bool) -> Decimal:
    return rate.weekend_price if is_weekend else rate.weekday_price


def validate_player_count(player_count: int, max_players: int | None = None) -> None:
    if isinstance(player_count, bool) or not isinstance(player_count, int) or player_count <= 0:
        raise InvalidPlayerCountError(f"Player count must be a positive integer, got {player_count!r}")
    if max_players is not None and player_count > max_players:
        raise InvalidPlayerCountError(f"Player count must not exceed {max_players}")


def compute_cost(player_count: int, is_weekend: bool, rate: Rate, *, max_players: int | None = None) -> Decimal:  # noqa: FBT001
    """Price per player for the day type times head count, rounded to cents.

    Day type is supplied by the caller; no calendar lookup happens here.
    """
    validate_player_count(player_count, max_players)
    return quantize_money(price_per_player(rate, is_weekend=is_weekend) * player_count)
