"""ORM models."""

from models.base import Base
from models.elo_day_state import EloDayState
from models.elo_system import EloSystem
from models.lunar_player import LunarPlayer
from models.match_set import MatchSetRow
from models.player import Player
from models.player_set_elo import PlayerSetElo

__all__ = [
    "Base",
    "EloDayState",
    "EloSystem",
    "LunarPlayer",
    "MatchSetRow",
    "Player",
    "PlayerSetElo",
]
