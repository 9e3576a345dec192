"""Data access layer: repository interfaces and shared persistence models."""

from shared.dal.admin_repository import AdminRepository
from shared.dal.demo_number_repository import DemoNumberRepository
from shared.dal.game_repository import GameRepository
from shared.dal.models import DemoPhoneNumber, Game, Player, Rate, SaleEntry, Score
from shared.dal.player_repository import PlayerRepository
from shared.dal.rate_repository import RateRepository

__all__ = [
    "AdminRepository",
    "DemoNumberRepository",
    "DemoPhoneNumber",
    "Game",
    "GameRepository",
    "Player",
    "PlayerRepository",
    "Rate",
    "RateRepository",
    "SaleEntry",
    "Score",
]
