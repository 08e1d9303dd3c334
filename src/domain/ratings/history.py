"""Per-player rating history built from the engine's change log."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date

from domain.ratings.common import MatchSet
from domain.ratings.elo.calculator import EloParameters, compute_ratings


@dataclass(frozen=True)
class RatingPoint:
    date: date
    set_id: int
    rating: float


def sort_sets_chronologically(sets: Iterable[MatchSet]) -> list[MatchSet]:
    """Order sets by play date, breaking ties on set id."""
    return sorted(sets, key=lambda match_set: (match_set.date, match_set.set_id))


def player_rating_history(
    player: str,
    sets: Iterable[MatchSet],
    initial_ratings: Mapping[str, float] | None = None,
    params: EloParameters | None = None,
) -> list[RatingPoint]:
    """Rating after each set the player took part in, oldest first.

    Sets are sorted chronologically before replay, so the first point is the
    player's first recorded set.
    """
    ordered = sort_sets_chronologically(sets)
    computation = compute_ratings(ordered, initial_ratings or {}, params)

    history: list[RatingPoint] = []
    for match_set in ordered:
        change = computation.changes[match_set.set_id].get(player)
        if change is None:
            continue
        history.append(
            RatingPoint(date=match_set.date, set_id=match_set.set_id, rating=change.after)
        )
    return history


def current_rating(
    player: str,
    sets: Iterable[MatchSet],
    initial_ratings: Mapping[str, float] | None = None,
    params: EloParameters | None = None,
) -> float | None:
    """Latest rating for a player, or None when they never played."""
    history = player_rating_history(player, sets, initial_ratings, params)
    if not history:
        return None
    return history[-1].rating


__all__ = [
    "RatingPoint",
    "current_rating",
    "player_rating_history",
    "sort_sets_chronologically",
]
