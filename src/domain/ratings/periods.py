"""Rating gains over calendar windows (for example "this month's Elo")."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import date, datetime
from zoneinfo import ZoneInfo

from domain.ratings.common import MatchSet
from domain.ratings.elo.calculator import EloParameters, compute_ratings

DEFAULT_TIMEZONE = "Europe/Copenhagen"


@dataclass(frozen=True)
class PlayerGain:
    player: str
    gain: float
    sets_played: int


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First day of the month and first day of the following month."""
    if not 1 <= month <= 12:
        raise ValueError(f"month must be between 1 and 12, got {month}")
    start = date(year, month, 1)
    end_exclusive = date(year + 1, 1, 1) if month == 12 else date(year, month + 1, 1)
    return start, end_exclusive


def current_month(tz: str = DEFAULT_TIMEZONE, now: datetime | None = None) -> tuple[int, int]:
    """(year, month) of ``now`` in the club's timezone."""
    zone = ZoneInfo(tz)
    local_now = now.astimezone(zone) if now is not None else datetime.now(zone)
    return local_now.year, local_now.month


def period_gains(
    sets: Iterable[MatchSet],
    initial_ratings: Mapping[str, float],
    start: date,
    end_exclusive: date,
    params: EloParameters | None = None,
) -> list[PlayerGain]:
    """Net rating change per player for sets dated in ``[start, end_exclusive)``.

    Sets before ``start`` are replayed first to seed ratings at the window
    start. ``sets`` must already be in chronological order; sets on or after
    ``end_exclusive`` are ignored.
    """
    if end_exclusive <= start:
        raise ValueError(f"empty period: start={start} end_exclusive={end_exclusive}")

    ordered = list(sets)
    before = [match_set for match_set in ordered if match_set.date < start]
    window = [match_set for match_set in ordered if start <= match_set.date < end_exclusive]
    if not window:
        return []

    seed = compute_ratings(before, initial_ratings, params).final_ratings
    computation = compute_ratings(window, seed, params)

    gains: dict[str, float] = defaultdict(float)
    sets_played: dict[str, int] = defaultdict(int)
    for per_player in computation.changes.values():
        for player, change in per_player.items():
            gains[player] += change.diff
            sets_played[player] += 1

    return sorted(
        (
            PlayerGain(player=player, gain=gain, sets_played=sets_played[player])
            for player, gain in gains.items()
        ),
        key=lambda entry: (-entry.gain, entry.player),
    )


def monthly_gains(
    sets: Iterable[MatchSet],
    initial_ratings: Mapping[str, float],
    year: int,
    month: int,
    params: EloParameters | None = None,
) -> list[PlayerGain]:
    start, end_exclusive = month_bounds(year, month)
    return period_gains(sets, initial_ratings, start, end_exclusive, params)


__all__ = [
    "DEFAULT_TIMEZONE",
    "PlayerGain",
    "current_month",
    "month_bounds",
    "monthly_gains",
    "period_gains",
]
