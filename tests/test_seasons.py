"""Tests for Lunar season scoring."""

from __future__ import annotations

from datetime import date

import pytest

from domain.ratings.common import MatchSet
from domain.ratings.seasons import (
    RatingSnapshot,
    count_thursdays,
    lunar_monthly_averages,
    lunar_row,
    lunar_season_months,
    lunar_standings,
    thursday_bonus,
)


def test_season_runs_august_to_january() -> None:
    autumn = lunar_season_months(date(2025, 10, 5))
    spring = lunar_season_months(date(2026, 3, 1))

    assert [(meta.year, meta.month) for meta in autumn] == [
        (2025, 8),
        (2025, 9),
        (2025, 10),
        (2025, 11),
        (2025, 12),
        (2026, 1),
    ]
    assert autumn == spring
    assert [meta.weight for meta in autumn] == [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
    assert autumn[-1].label == "Jan"


def test_weighted_average_skips_empty_months() -> None:
    snapshots = [
        RatingSnapshot(player="anna", date=date(2025, 8, 7), rating=1500.0),
        RatingSnapshot(player="anna", date=date(2025, 8, 14), rating=1520.0),
        RatingSnapshot(player="anna", date=date(2026, 1, 8), rating=1600.0),
        RatingSnapshot(player="anna", date=date(2025, 6, 1), rating=9999.0),
    ]

    result = lunar_monthly_averages(snapshots, start_rating=1500.0, reference=date(2025, 12, 1))

    assert result.months[0].average_rating == pytest.approx(1510.0)
    assert result.months[1].average_rating is None
    assert result.months[5].average_rating == pytest.approx(1600.0)
    assert result.weighted_average == pytest.approx((1510.0 * 1 + 1600.0 * 6) / 7)


def test_player_without_snapshots_gets_start_rating() -> None:
    result = lunar_monthly_averages([], start_rating=1450.0, reference=date(2025, 9, 1))

    assert result.weighted_average == pytest.approx(1450.0)
    assert all(month.average_rating == pytest.approx(1450.0) for month in result.months)


def test_snapshots_outside_season_fall_back_to_latest() -> None:
    snapshots = [
        RatingSnapshot(player="anna", date=date(2025, 5, 1), rating=1480.0),
        RatingSnapshot(player="anna", date=date(2025, 6, 1), rating=1490.0),
    ]
    result = lunar_monthly_averages(snapshots, start_rating=1500.0, reference=date(2025, 9, 1))

    assert result.weighted_average == pytest.approx(1490.0)
    assert all(month.average_rating is None for month in result.months)


def test_thursday_bonus_is_five_points_each() -> None:
    assert thursday_bonus(0) == pytest.approx(0.0)
    assert thursday_bonus(4) == pytest.approx(20.0)
    with pytest.raises(ValueError):
        thursday_bonus(-1)


def _set(set_id: int, set_date: date, team_a: tuple[str, str], team_b: tuple[str, str]) -> MatchSet:
    return MatchSet(
        set_id=set_id,
        match_id=set_id,
        date=set_date,
        team_a1=team_a[0],
        team_a2=team_a[1],
        team_b1=team_b[0],
        team_b2=team_b[1],
        score_a=6,
        score_b=0,
    )


# 2025-09-04 and 2025-09-11 are Thursdays.
SEASON_SETS = [
    _set(1, date(2025, 9, 4), ("anna", "bo"), ("carl", "dina")),
    _set(2, date(2025, 9, 4), ("anna", "carl"), ("bo", "dina")),
    _set(3, date(2025, 9, 11), ("erik", "finn"), ("gus", "hans")),
]


def test_count_thursdays_counts_distinct_dates() -> None:
    sets = [
        *SEASON_SETS,
        _set(4, date(2025, 9, 5), ("anna", "bo"), ("carl", "dina")),
        _set(5, date(2025, 9, 18), ("anna", "gus"), ("erik", "hans")),
    ]

    assert count_thursdays("anna", sets) == 2
    assert count_thursdays("bo", sets) == 1
    assert count_thursdays("zoe", sets) == 0


def test_lunar_row_adds_bonus_and_thursday_points() -> None:
    row = lunar_row("anna", SEASON_SETS, reference=date(2025, 10, 1), bonus=10.0)

    # anna: 1516 after set 1, 1532 after set 2, both in September.
    assert row.weighted_average == pytest.approx(1524.0)
    assert row.months[1].average_rating == pytest.approx(1524.0)
    assert row.thursday_count == 1
    assert row.thursday_points == pytest.approx(5.0)
    assert row.bonus == pytest.approx(10.0)
    assert row.total == pytest.approx(1539.0)


def test_lunar_standings_rank_by_total() -> None:
    rows = lunar_standings(
        ["dina", "anna", "zoe", "erik", "anna"],
        SEASON_SETS,
        {"zoe": 1500.0},
        reference=date(2025, 10, 1),
        bonuses={"anna": 10.0},
    )

    assert [row.player for row in rows] == ["anna", "erik", "zoe", "dina"]
    totals = {row.player: row.total for row in rows}
    assert totals["erik"] == pytest.approx(1521.0)
    assert totals["zoe"] == pytest.approx(1500.0)
    assert totals["dina"] == pytest.approx(1481.0)
    assert rows[2].thursday_count == 0
