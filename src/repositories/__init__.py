"""Database repository helpers."""

from repositories.definitions import ELO_DAY_STATE_TABLE, PLAYER_SET_ELO_TABLE
from repositories.match_sets import (
    fetch_lunar_bonuses,
    fetch_match_sets,
    fetch_player_profiles,
    fetch_start_ratings,
    insert_match_sets,
)

__all__ = [
    "ELO_DAY_STATE_TABLE",
    "PLAYER_SET_ELO_TABLE",
    "fetch_lunar_bonuses",
    "fetch_match_sets",
    "fetch_player_profiles",
    "fetch_start_ratings",
    "insert_match_sets",
]
