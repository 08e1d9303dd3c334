"""Unit tests for the doubles padel Elo engine."""

from __future__ import annotations

import math
from datetime import date

import pytest

from domain.ratings.common import InvalidMatchSetError, MatchSet, TiebreakKind
from domain.ratings.elo.calculator import (
    DEFAULT_PARTIAL_K_FACTORS,
    EloParameters,
    PadelEloCalculator,
    adjusted_k_factor,
    base_k_factor,
    calculate_expected_score,
    compute_ratings,
)


def _set(
    *,
    set_id: int = 1,
    team_a: tuple[str, str] = ("anna", "bo"),
    team_b: tuple[str, str] = ("carl", "dina"),
    score_a: float = 6,
    score_b: float = 0,
    finished: bool = True,
    is_event: bool = False,
    tiebreak: TiebreakKind = TiebreakKind.NONE,
    set_date: date = date(2025, 3, 6),
) -> MatchSet:
    return MatchSet(
        set_id=set_id,
        match_id=100,
        date=set_date,
        team_a1=team_a[0],
        team_a2=team_a[1],
        team_b1=team_b[0],
        team_b2=team_b[1],
        score_a=score_a,
        score_b=score_b,
        finished=finished,
        is_event=is_event,
        tiebreak=tiebreak,
    )


def test_elo_parameters_defaults_are_expected_constants() -> None:
    params = EloParameters()
    assert params.initial_elo == pytest.approx(1500.0)
    assert params.k_factor == pytest.approx(32.0)
    assert params.scale_factor == pytest.approx(400.0)
    assert params.tiebreak_k_factor == pytest.approx(8.0)
    assert params.match_tiebreak_k_factor == pytest.approx(16.0)
    assert params.event_multiplier == pytest.approx(2.0)
    assert dict(params.partial_k_factors) == {0: 0.0, 1: 1.0, 2: 2.0, 3: 4.0, 4: 8.0, 5: 16.0, 6: 16.0}
    assert params.reject_finished_draws is True


def test_partial_k_table_default_is_shared_and_read_only() -> None:
    first = EloParameters()
    second = EloParameters()

    assert first.partial_k_factors is DEFAULT_PARTIAL_K_FACTORS
    assert second.partial_k_factors is DEFAULT_PARTIAL_K_FACTORS
    with pytest.raises(TypeError):
        first.partial_k_factors[4] = 99.0  # type: ignore[index]


def test_custom_partial_k_table_overrides_default() -> None:
    params = EloParameters(partial_k_factors={4: 12.0})
    match_set = _set(score_a=4, score_b=1, finished=False)

    assert base_k_factor(match_set, params) == pytest.approx(12.0)
    assert dict(EloParameters().partial_k_factors)[4] == pytest.approx(8.0)


def test_expected_score_equal_ratings_is_half() -> None:
    assert calculate_expected_score(1500.0, 1500.0, 400.0) == pytest.approx(0.5)


def test_expected_scores_sum_to_one() -> None:
    expected_a = calculate_expected_score(1600.0, 1500.0, 400.0)
    expected_b = calculate_expected_score(1500.0, 1600.0, 400.0)
    assert expected_a + expected_b == pytest.approx(1.0)


def test_new_players_finished_six_love() -> None:
    result = compute_ratings([_set()], {})

    assert result.final_ratings["anna"] == pytest.approx(1516.0)
    assert result.final_ratings["bo"] == pytest.approx(1516.0)
    assert result.final_ratings["carl"] == pytest.approx(1484.0)
    assert result.final_ratings["dina"] == pytest.approx(1484.0)

    change = result.changes[1]["anna"]
    assert change.before == pytest.approx(1500.0)
    assert change.after == pytest.approx(1516.0)
    assert change.diff == pytest.approx(16.0)
    assert result.changes[1]["dina"].diff == pytest.approx(-16.0)


def test_event_set_doubles_k() -> None:
    result = compute_ratings([_set(is_event=True)], {})

    assert result.final_ratings["anna"] == pytest.approx(1532.0)
    assert result.final_ratings["carl"] == pytest.approx(1468.0)


def test_unfinished_set_uses_partial_k_and_score_share() -> None:
    result = compute_ratings([_set(score_a=4, score_b=2, finished=False)], {})

    # max score 4 -> K=8, scaled by 4/6, times (1 - 0.5)
    assert result.changes[1]["anna"].diff == pytest.approx((8.0 / 6.0) * 4.0 * 0.5)
    assert result.changes[1]["carl"].diff == pytest.approx(-(8.0 / 6.0) * 4.0 * 0.5)


def test_tiebreak_overrides_score_based_k() -> None:
    tiebreak = _set(score_a=7, score_b=6, tiebreak=TiebreakKind.TIEBREAK)
    tiebreak_unfinished = _set(score_a=7, score_b=6, finished=False, tiebreak=TiebreakKind.TIEBREAK)
    tiebreak_event = _set(score_a=7, score_b=6, is_event=True, tiebreak=TiebreakKind.TIEBREAK)
    params = EloParameters()

    assert base_k_factor(tiebreak, params) == pytest.approx(8.0)
    assert base_k_factor(tiebreak_unfinished, params) == pytest.approx(8.0)
    assert base_k_factor(tiebreak_event, params) == pytest.approx(16.0)

    result = compute_ratings([tiebreak], {})
    assert result.changes[1]["anna"].diff == pytest.approx((8.0 / 13.0) * 7.0 * 0.5)


def test_match_tiebreak_k() -> None:
    match_tiebreak = _set(score_a=10, score_b=8, tiebreak=TiebreakKind.MATCH_TIEBREAK)
    assert base_k_factor(match_tiebreak, EloParameters()) == pytest.approx(16.0)


@pytest.mark.parametrize(
    ("max_score", "expected_k"),
    [(6, 16.0), (5, 16.0), (4, 8.0), (3, 4.0), (2, 2.0), (1, 1.0), (0, 0.0), (7, 32.0)],
)
def test_unfinished_k_by_max_score(max_score: int, expected_k: float) -> None:
    match_set = _set(score_a=max_score, score_b=0, finished=False)
    assert base_k_factor(match_set, EloParameters()) == pytest.approx(expected_k)


@pytest.mark.parametrize(
    ("k_factor", "score_a", "score_b", "expected"),
    [
        (32.0, 6, 0, 32.0),
        (32.0, 6, 4, 19.2),
        (16.0, 4, 2, 16.0 / 6.0 * 4.0),
        (8.0, 7, 6, 8.0 / 13.0 * 7.0),
        (32.0, 2, 6, 24.0),
        (32.0, 0, 0, 32.0),
    ],
)
def test_adjusted_k_factor_table(k_factor: float, score_a: float, score_b: float, expected: float) -> None:
    assert adjusted_k_factor(k_factor, score_a, score_b) == pytest.approx(expected)


def test_unfinished_zero_zero_set_changes_nothing() -> None:
    result = compute_ratings([_set(score_a=0, score_b=0, finished=False, is_event=True)], {"anna": 1600.0})

    assert result.final_ratings["anna"] == pytest.approx(1600.0)
    assert all(change.diff == 0.0 for change in result.changes[1].values())


def test_updates_are_zero_sum() -> None:
    ratings = {"anna": 1620.0, "bo": 1410.0, "carl": 1555.0, "dina": 1490.0}
    result = compute_ratings([_set(score_a=3, score_b=6)], ratings)

    assert sum(change.diff for change in result.changes[1].values()) == pytest.approx(0.0)
    assert sum(result.final_ratings.values()) == pytest.approx(sum(ratings.values()))


def test_partners_move_together() -> None:
    ratings = {"anna": 1700.0, "bo": 1300.0, "carl": 1550.0, "dina": 1450.0}
    result = compute_ratings([_set(score_a=6, score_b=3)], ratings)
    changes = result.changes[1]

    assert changes["anna"].diff == changes["bo"].diff
    assert changes["carl"].diff == changes["dina"].diff
    assert changes["anna"].diff == pytest.approx(-changes["carl"].diff)


def test_swapping_teams_mirrors_deltas() -> None:
    ratings = {"anna": 1580.0, "bo": 1520.0, "carl": 1490.0, "dina": 1450.0}
    original = compute_ratings([_set(score_a=6, score_b=4)], ratings)
    swapped = compute_ratings(
        [_set(team_a=("carl", "dina"), team_b=("anna", "bo"), score_a=4, score_b=6)],
        ratings,
    )

    for player in ("anna", "bo", "carl", "dina"):
        assert swapped.changes[1][player].diff == pytest.approx(original.changes[1][player].diff)


def test_event_doubles_delta_magnitude() -> None:
    ratings = {"anna": 1580.0, "bo": 1520.0, "carl": 1490.0, "dina": 1450.0}
    regular = compute_ratings([_set(score_a=6, score_b=4)], ratings)
    event = compute_ratings([_set(score_a=6, score_b=4, is_event=True)], ratings)

    assert event.changes[1]["anna"].diff == pytest.approx(2.0 * regular.changes[1]["anna"].diff)


def test_unfinished_draw_uses_expectation_gap() -> None:
    ratings = {"anna": 1600.0, "bo": 1600.0, "carl": 1400.0, "dina": 1400.0}
    result = compute_ratings([_set(score_a=3, score_b=3, finished=False)], ratings)

    expected_a = calculate_expected_score(1600.0, 1400.0, 400.0)
    adjusted = (4.0 / 6.0) * 3.0
    assert result.changes[1]["anna"].diff == pytest.approx(adjusted * ((1.0 - expected_a) - expected_a))
    assert result.changes[1]["anna"].diff < 0.0
    assert result.changes[1]["carl"].diff > 0.0


def test_finished_draw_is_rejected_by_default() -> None:
    with pytest.raises(InvalidMatchSetError, match=r"marked finished but level"):
        compute_ratings([_set(score_a=5, score_b=5)], {})


def test_finished_draw_allowed_when_configured() -> None:
    params = EloParameters(reject_finished_draws=False)
    ratings = {"anna": 1600.0, "bo": 1600.0, "carl": 1400.0, "dina": 1400.0}
    result = compute_ratings([_set(score_a=3, score_b=3)], ratings, params)

    expected_a = calculate_expected_score(1600.0, 1400.0, 400.0)
    assert result.changes[1]["anna"].diff == pytest.approx(16.0 * (1.0 - 2.0 * expected_a))


def test_sequential_sets_chain_before_and_after() -> None:
    sets = [
        _set(set_id=1, score_a=6, score_b=2),
        _set(set_id=2, team_a=("anna", "carl"), team_b=("bo", "dina"), score_a=3, score_b=6),
        _set(set_id=3, score_a=6, score_b=4, is_event=True),
    ]
    result = compute_ratings(sets, {})

    for player in ("anna", "bo", "carl", "dina"):
        assert result.changes[2][player].before == result.changes[1][player].after
        assert result.changes[3][player].before == result.changes[2][player].after
        assert result.final_ratings[player] == result.changes[3][player].after


def test_replay_is_deterministic() -> None:
    sets = [
        _set(set_id=1, score_a=6, score_b=2),
        _set(set_id=2, team_a=("anna", "carl"), team_b=("bo", "dina"), score_a=4, score_b=6),
    ]
    ratings = {"anna": 1512.5, "dina": 1488.0}

    assert compute_ratings(sets, ratings) == compute_ratings(sets, ratings)


def test_initial_ratings_are_not_mutated() -> None:
    ratings = {"anna": 1550.0}
    result = compute_ratings([_set()], ratings)

    assert ratings == {"anna": 1550.0}
    assert result.final_ratings is not ratings
    assert result.changes[1]["anna"].before == pytest.approx(1550.0)


def test_unknown_players_start_at_configured_baseline() -> None:
    result = compute_ratings([_set()], {}, EloParameters(initial_elo=1000.0))
    assert result.changes[1]["carl"].before == pytest.approx(1000.0)


def test_empty_input_returns_copy_of_initial_ratings() -> None:
    result = compute_ratings([], {"anna": 1500.0})
    assert result.final_ratings == {"anna": 1500.0}
    assert result.changes == {}


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"team_a": ("", "bo")}, r"empty player identifier"),
        ({"team_a": ("   ", "bo")}, r"empty player identifier"),
        ({"team_b": ("anna", "dina")}, r"four distinct players"),
        ({"score_a": -1}, r"is negative"),
        ({"score_a": math.nan}, r"is not finite"),
        ({"score_b": math.inf}, r"is not finite"),
    ],
)
def test_invalid_sets_raise(kwargs: dict, message: str) -> None:
    with pytest.raises(InvalidMatchSetError, match=message):
        compute_ratings([_set(**kwargs)], {})


def test_duplicate_set_ids_raise() -> None:
    with pytest.raises(InvalidMatchSetError, match=r"set_id=1 appears more than once"):
        compute_ratings([_set(set_id=1), _set(set_id=1)], {})


def test_invalid_set_leaves_calculator_ratings_untouched() -> None:
    calculator = PadelEloCalculator(EloParameters(), initial_ratings={"anna": 1600.0})
    with pytest.raises(InvalidMatchSetError):
        calculator.process_set(_set(score_b=-2))

    assert calculator.ratings() == {"anna": 1600.0}


def test_process_set_returns_event_per_player() -> None:
    calculator = PadelEloCalculator(EloParameters())
    events = calculator.process_set(_set(score_a=2, score_b=6))

    assert [event.player for event in events] == ["anna", "bo", "carl", "dina"]
    winners = [event for event in events if event.won]
    assert {event.player for event in winners} == {"carl", "dina"}
    assert all(event.post_elo > event.pre_elo for event in winners)
    assert events[0].partner == "bo"
    assert (events[0].opponent1, events[0].opponent2) == ("carl", "dina")
    assert events[0].k_factor == pytest.approx(32.0)
    assert events[0].adjusted_k_factor == pytest.approx(24.0)
    assert calculator.tracked_player_count() == 4


def test_tiebreak_kind_parses_stored_values() -> None:
    assert TiebreakKind.parse(None) is TiebreakKind.NONE
    assert TiebreakKind.parse("ingen") is TiebreakKind.NONE
    assert TiebreakKind.parse("false") is TiebreakKind.NONE
    assert TiebreakKind.parse(False) is TiebreakKind.NONE
    assert TiebreakKind.parse("tiebreak") is TiebreakKind.TIEBREAK
    assert TiebreakKind.parse("matchtiebreak") is TiebreakKind.MATCH_TIEBREAK
    assert TiebreakKind.parse("match_tiebreak") is TiebreakKind.MATCH_TIEBREAK
    with pytest.raises(ValueError, match="Unknown tiebreak kind"):
        TiebreakKind.parse("super")
