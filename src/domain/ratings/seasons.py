"""Lunar season scoring: weighted monthly rating averages from August to January."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from datetime import date

from domain.ratings.common import MatchSet
from domain.ratings.elo.calculator import EloParameters, compute_ratings
from domain.ratings.history import sort_sets_chronologically

THURSDAY_BONUS_POINTS = 5.0

# (month, weight, label); January belongs to the following calendar year.
_SEASON_MONTHS = (
    (8, 1.0, "Aug"),
    (9, 2.0, "Sep"),
    (10, 3.0, "Okt"),
    (11, 4.0, "Nov"),
    (12, 5.0, "Dec"),
    (1, 6.0, "Jan"),
)


@dataclass(frozen=True)
class SeasonMonth:
    year: int
    month: int
    weight: float
    label: str


@dataclass(frozen=True)
class MonthAverage:
    year: int
    month: int
    weight: float
    label: str
    average_rating: float | None


@dataclass(frozen=True)
class RatingSnapshot:
    player: str
    date: date
    rating: float


@dataclass(frozen=True)
class SeasonAverages:
    months: list[MonthAverage]
    weighted_average: float


def lunar_season_months(reference: date) -> list[SeasonMonth]:
    """Months of the season containing ``reference``.

    From August to December the season starts this year; from January to July
    it started last August.
    """
    season_start_year = reference.year if reference.month >= 8 else reference.year - 1
    return [
        SeasonMonth(
            year=season_start_year + 1 if month == 1 else season_start_year,
            month=month,
            weight=weight,
            label=label,
        )
        for month, weight, label in _SEASON_MONTHS
    ]


def lunar_monthly_averages(
    snapshots: Sequence[RatingSnapshot],
    start_rating: float,
    reference: date,
) -> SeasonAverages:
    """Average rating per season month and the weight-adjusted season average for one player.

    A player without snapshots gets ``start_rating`` everywhere. Months
    without snapshots are reported as ``None`` and do not count towards the
    weighted average.
    """
    months_meta = lunar_season_months(reference)

    if not snapshots:
        return SeasonAverages(
            months=[
                MonthAverage(
                    year=meta.year,
                    month=meta.month,
                    weight=meta.weight,
                    label=meta.label,
                    average_rating=start_rating,
                )
                for meta in months_meta
            ],
            weighted_average=start_rating,
        )

    per_month: dict[tuple[int, int], list[float]] = defaultdict(list)
    for snapshot in snapshots:
        per_month[(snapshot.date.year, snapshot.date.month)].append(snapshot.rating)

    months: list[MonthAverage] = []
    weighted_sum = 0.0
    weight_sum = 0.0
    for meta in months_meta:
        ratings = per_month.get((meta.year, meta.month))
        average = sum(ratings) / len(ratings) if ratings else None
        months.append(
            MonthAverage(
                year=meta.year,
                month=meta.month,
                weight=meta.weight,
                label=meta.label,
                average_rating=average,
            )
        )
        if average is not None:
            weighted_sum += average * meta.weight
            weight_sum += meta.weight

    if weight_sum > 0.0:
        weighted_average = weighted_sum / weight_sum
    else:
        weighted_average = snapshots[-1].rating

    return SeasonAverages(months=months, weighted_average=weighted_average)


def thursday_bonus(count: int) -> float:
    """Bonus points for Thursday sessions attended."""
    if count < 0:
        raise ValueError("count must be >= 0")
    return count * THURSDAY_BONUS_POINTS


@dataclass(frozen=True)
class LunarRow:
    """One player's Lunar season score.

    ``total`` is the weighted monthly average plus the manual ``bonus`` and
    the Thursday points.
    """

    player: str
    months: list[MonthAverage]
    weighted_average: float
    bonus: float
    thursday_count: int
    thursday_points: float
    total: float


def count_thursdays(player: str, sets: Iterable[MatchSet]) -> int:
    """Distinct Thursdays on which ``player`` played at least one set."""
    return len(
        {
            match_set.date
            for match_set in sets
            if match_set.date.weekday() == 3 and player in match_set.players
        }
    )


def lunar_standings(
    players: Iterable[str],
    sets: Iterable[MatchSet],
    initial_ratings: Mapping[str, float] | None = None,
    params: EloParameters | None = None,
    *,
    reference: date,
    bonuses: Mapping[str, float] | None = None,
) -> list[LunarRow]:
    """Lunar rows for ``players`` ranked by total, highest first.

    All sets are replayed once; each player's snapshots are the ratings after
    the sets they played.
    """
    params = params or EloParameters()
    initial_ratings = initial_ratings or {}
    bonuses = bonuses or {}

    ordered = sort_sets_chronologically(sets)
    computation = compute_ratings(ordered, initial_ratings, params)

    snapshots: dict[str, list[RatingSnapshot]] = defaultdict(list)
    for match_set in ordered:
        for player, change in computation.changes[match_set.set_id].items():
            snapshots[player].append(
                RatingSnapshot(player=player, date=match_set.date, rating=change.after)
            )

    rows: list[LunarRow] = []
    for player in dict.fromkeys(players):
        season = lunar_monthly_averages(
            snapshots.get(player, []),
            start_rating=initial_ratings.get(player, params.initial_elo),
            reference=reference,
        )
        thursday_count = count_thursdays(player, ordered)
        thursday_points = thursday_bonus(thursday_count)
        bonus = float(bonuses.get(player, 0.0))
        rows.append(
            LunarRow(
                player=player,
                months=season.months,
                weighted_average=season.weighted_average,
                bonus=bonus,
                thursday_count=thursday_count,
                thursday_points=thursday_points,
                total=season.weighted_average + bonus + thursday_points,
            )
        )

    rows.sort(key=lambda row: (-row.total, row.player))
    return rows


def lunar_row(
    player: str,
    sets: Iterable[MatchSet],
    initial_ratings: Mapping[str, float] | None = None,
    params: EloParameters | None = None,
    *,
    reference: date,
    bonus: float = 0.0,
) -> LunarRow:
    return lunar_standings(
        [player],
        sets,
        initial_ratings,
        params,
        reference=reference,
        bonuses={player: bonus},
    )[0]


__all__ = [
    "LunarRow",
    "MonthAverage",
    "RatingSnapshot",
    "SeasonAverages",
    "SeasonMonth",
    "THURSDAY_BONUS_POINTS",
    "count_thursdays",
    "lunar_monthly_averages",
    "lunar_row",
    "lunar_season_months",
    "lunar_standings",
    "thursday_bonus",
]
