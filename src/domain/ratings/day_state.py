"""Start-of-day rating snapshots for every player active on a given day."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date
from itertools import groupby

from domain.ratings.common import MatchSet
from domain.ratings.elo.calculator import EloParameters, PadelEloCalculator
from domain.ratings.history import sort_sets_chronologically


@dataclass(frozen=True)
class DayState:
    date: date
    player: str
    rating_at_start: float
    sets_played: int


def build_day_states(
    sets: Iterable[MatchSet],
    initial_ratings: Mapping[str, float] | None = None,
    params: EloParameters | None = None,
) -> list[DayState]:
    """Replay all sets day by day and snapshot each player's rating before their first set that day."""
    calculator = PadelEloCalculator(params or EloParameters(), initial_ratings=initial_ratings)
    states: list[DayState] = []

    for set_date, day_sets_iter in groupby(
        sort_sets_chronologically(sets),
        key=lambda match_set: match_set.date,
    ):
        day_sets = list(day_sets_iter)

        counts: dict[str, int] = {}
        for match_set in day_sets:
            for player in match_set.players:
                counts[player] = counts.get(player, 0) + 1

        for player in sorted(counts):
            states.append(
                DayState(
                    date=set_date,
                    player=player,
                    rating_at_start=calculator.get_rating(player),
                    sets_played=counts[player],
                )
            )

        for match_set in day_sets:
            calculator.process_set(match_set)

    return states


__all__ = ["DayState", "build_day_states"]
