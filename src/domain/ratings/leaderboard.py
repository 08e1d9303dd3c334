"""Leaderboard views over a full replay."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date

from domain.ratings.common import MatchSet, PlayerProfile
from domain.ratings.elo.calculator import EloParameters, PadelEloCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    player: str
    rating: float
    sets_played: int
    active: bool


@dataclass(frozen=True)
class ActivityEntry:
    player: str
    sets_played: int


def build_leaderboard(
    sets: Iterable[MatchSet],
    profiles: Sequence[PlayerProfile],
    params: EloParameters | None = None,
    *,
    active_only: bool = False,
    known_players_only: bool = False,
) -> list[LeaderboardEntry]:
    """Replay ordered sets and rank players by final rating.

    Every profile is seeded with its start rating (or the baseline when it has
    none) so players without sets still appear. With ``known_players_only``,
    sets involving a player without a profile are skipped.
    """
    params = params or EloParameters()
    seed = {
        profile.name: (
            profile.start_rating if profile.start_rating is not None else params.initial_elo
        )
        for profile in profiles
    }
    active_by_player = {profile.name: profile.active for profile in profiles}

    calculator = PadelEloCalculator(params, initial_ratings=seed)
    sets_played: Counter[str] = Counter()
    skipped = 0

    for match_set in sets:
        if known_players_only:
            missing = [player for player in match_set.players if player not in seed]
            if missing:
                skipped += 1
                logger.debug("skipping set_id=%s unknown players=%s", match_set.set_id, missing)
                continue
        calculator.process_set(match_set)
        sets_played.update(match_set.players)

    if skipped:
        logger.info("skipped %d sets with players missing a profile", skipped)

    rows = [
        (player, rating, active_by_player.get(player, True))
        for player, rating in calculator.ratings().items()
    ]
    if active_only:
        rows = [row for row in rows if row[2] and row[0] in active_by_player]
    rows.sort(key=lambda row: (-row[1], row[0]))

    return [
        LeaderboardEntry(
            rank=rank,
            player=player,
            rating=rating,
            sets_played=sets_played[player],
            active=active,
        )
        for rank, (player, rating, active) in enumerate(rows, start=1)
    ]


def most_active_players(
    sets: Iterable[MatchSet],
    *,
    since: date | None = None,
    limit: int = 20,
) -> list[ActivityEntry]:
    """Players with the most sets played on or after ``since``."""
    if limit <= 0:
        raise ValueError("limit must be greater than 0")

    counts: Counter[str] = Counter()
    for match_set in sets:
        if since is not None and match_set.date < since:
            continue
        counts.update(player for player in match_set.players if player)

    ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
    return [ActivityEntry(player=player, sets_played=count) for player, count in ranked[:limit]]


__all__ = [
    "ActivityEntry",
    "LeaderboardEntry",
    "build_leaderboard",
    "most_active_players",
]
