"""Tables rebuilt from a padel Elo replay."""

from __future__ import annotations

from typing import Any

from domain.ratings.day_state import DayState
from domain.ratings.elo.calculator import PlayerSetEloEvent
from models import EloDayState, PlayerSetElo
from repositories.base import EloDerivedTable


def _player_set_event_to_row(event: PlayerSetEloEvent, elo_system_id: int) -> dict[str, Any]:
    return {
        "elo_system_id": elo_system_id,
        "player": event.player,
        "partner": event.partner,
        "opponent1": event.opponent1,
        "opponent2": event.opponent2,
        "set_id": event.set_id,
        "match_id": event.match_id,
        "set_date": event.set_date,
        "won": event.won,
        "expected_score": event.expected_score,
        "pre_elo": event.pre_elo,
        "elo_delta": event.elo_delta,
        "post_elo": event.post_elo,
        "k_factor": event.k_factor,
        "adjusted_k_factor": event.adjusted_k_factor,
        "initial_elo": event.initial_elo,
    }


def _day_state_to_row(state: DayState, elo_system_id: int) -> dict[str, Any]:
    return {
        "elo_system_id": elo_system_id,
        "state_date": state.date,
        "player": state.player,
        "elo_start": state.rating_at_start,
        "sets_played": state.sets_played,
    }


PLAYER_SET_ELO_TABLE = EloDerivedTable[PlayerSetEloEvent](
    model=PlayerSetElo,
    to_row=_player_set_event_to_row,
)

ELO_DAY_STATE_TABLE = EloDerivedTable[DayState](
    model=EloDayState,
    to_row=_day_state_to_row,
)

__all__ = ["ELO_DAY_STATE_TABLE", "PLAYER_SET_ELO_TABLE"]
