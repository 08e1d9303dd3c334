"""Doubles padel Elo logic."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date
from math import isfinite
from types import MappingProxyType

from domain.ratings.common import (
    InvalidMatchSetError,
    MatchSet,
    RatingChange,
    RatingComputation,
    TiebreakKind,
)

# Unfinished sets are weighted by how far play got, keyed by the higher score.
DEFAULT_PARTIAL_K_FACTORS: Mapping[int, float] = MappingProxyType(
    {
        0: 0.0,
        1: 1.0,
        2: 2.0,
        3: 4.0,
        4: 8.0,
        5: 16.0,
        6: 16.0,
    }
)


@dataclass(frozen=True)
class EloParameters:
    initial_elo: float = 1500.0
    k_factor: float = 32.0
    scale_factor: float = 400.0
    tiebreak_k_factor: float = 8.0
    match_tiebreak_k_factor: float = 16.0
    event_multiplier: float = 2.0
    partial_k_factors: Mapping[int, float] = field(default_factory=lambda: DEFAULT_PARTIAL_K_FACTORS)
    reject_finished_draws: bool = True


@dataclass(frozen=True)
class PlayerSetEloEvent:
    player: str
    partner: str
    opponent1: str
    opponent2: str
    set_id: int
    match_id: int
    set_date: date
    won: bool
    expected_score: float
    pre_elo: float
    elo_delta: float
    post_elo: float
    k_factor: float
    adjusted_k_factor: float
    initial_elo: float

    def as_change(self) -> RatingChange:
        return RatingChange(before=self.pre_elo, after=self.post_elo, diff=self.elo_delta)


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def base_k_factor(match_set: MatchSet, params: EloParameters) -> float:
    """Pick the K-factor for a set before partial-play scaling."""
    if match_set.tiebreak == TiebreakKind.TIEBREAK:
        k_factor = params.tiebreak_k_factor
    elif match_set.tiebreak == TiebreakKind.MATCH_TIEBREAK:
        k_factor = params.match_tiebreak_k_factor
    elif not match_set.finished:
        max_score = max(match_set.score_a, match_set.score_b)
        if max_score == int(max_score):
            k_factor = params.partial_k_factors.get(int(max_score), params.k_factor)
        else:
            k_factor = params.k_factor
    else:
        k_factor = params.k_factor

    if match_set.is_event:
        k_factor *= params.event_multiplier
    return k_factor


def adjusted_k_factor(k_factor: float, score_a: float, score_b: float) -> float:
    """Scale K by the winner's share of the games played."""
    score_sum = score_a + score_b
    if score_sum <= 0:
        return k_factor
    return (k_factor / score_sum) * max(score_a, score_b)


def validate_match_set(match_set: MatchSet, params: EloParameters) -> None:
    """Reject sets that would corrupt the rating map."""
    for player in match_set.players:
        if not isinstance(player, str) or not player.strip():
            raise InvalidMatchSetError(
                f"set_id={match_set.set_id} has an empty player identifier"
            )
    if len(set(match_set.players)) != 4:
        raise InvalidMatchSetError(
            f"set_id={match_set.set_id} needs four distinct players, got {match_set.players}"
        )

    for label, score in (("score_a", match_set.score_a), ("score_b", match_set.score_b)):
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            raise InvalidMatchSetError(f"set_id={match_set.set_id} {label}={score!r} is not a number")
        if not isfinite(score):
            raise InvalidMatchSetError(f"set_id={match_set.set_id} {label}={score!r} is not finite")
        if score < 0:
            raise InvalidMatchSetError(f"set_id={match_set.set_id} {label}={score!r} is negative")

    if (
        params.reject_finished_draws
        and match_set.finished
        and match_set.score_a == match_set.score_b
    ):
        raise InvalidMatchSetError(
            f"set_id={match_set.set_id} is marked finished but level at "
            f"{match_set.score_a}-{match_set.score_b}"
        )


class PadelEloCalculator:
    """Stateful set-by-set doubles Elo calculator."""

    def __init__(
        self,
        params: EloParameters,
        *,
        initial_ratings: Mapping[str, float] | None = None,
    ) -> None:
        self.params = params
        self._ratings: dict[str, float] = dict(initial_ratings or {})

    def get_rating(self, player: str) -> float:
        return self._ratings.get(player, self.params.initial_elo)

    def tracked_player_count(self) -> int:
        return len(self._ratings)

    def ratings(self) -> dict[str, float]:
        """Return a snapshot of current player ratings."""
        return dict(self._ratings)

    def process_set(self, match_set: MatchSet) -> list[PlayerSetEloEvent]:
        validate_match_set(match_set, self.params)

        a1_pre = self.get_rating(match_set.team_a1)
        a2_pre = self.get_rating(match_set.team_a2)
        b1_pre = self.get_rating(match_set.team_b1)
        b2_pre = self.get_rating(match_set.team_b2)

        team_a_rating = (a1_pre + a2_pre) / 2
        team_b_rating = (b1_pre + b2_pre) / 2

        team_a_expected = calculate_expected_score(
            rating=team_a_rating,
            opponent_rating=team_b_rating,
            scale_factor=self.params.scale_factor,
        )
        team_b_expected = 1.0 - team_a_expected

        k_factor = base_k_factor(match_set, self.params)
        effective_k = adjusted_k_factor(k_factor, match_set.score_a, match_set.score_b)

        if match_set.score_a > match_set.score_b:
            team_a_delta = effective_k * (1.0 - team_a_expected)
        elif match_set.score_b > match_set.score_a:
            team_a_delta = -effective_k * (1.0 - team_b_expected)
        else:
            team_a_delta = effective_k * (team_b_expected - team_a_expected)
        team_b_delta = -team_a_delta

        events = [
            self._event(
                match_set,
                player=match_set.team_a1,
                partner=match_set.team_a2,
                opponents=match_set.team_b,
                won=match_set.score_a > match_set.score_b,
                expected_score=team_a_expected,
                pre_elo=a1_pre,
                delta=team_a_delta,
                k_factor=k_factor,
                effective_k=effective_k,
            ),
            self._event(
                match_set,
                player=match_set.team_a2,
                partner=match_set.team_a1,
                opponents=match_set.team_b,
                won=match_set.score_a > match_set.score_b,
                expected_score=team_a_expected,
                pre_elo=a2_pre,
                delta=team_a_delta,
                k_factor=k_factor,
                effective_k=effective_k,
            ),
            self._event(
                match_set,
                player=match_set.team_b1,
                partner=match_set.team_b2,
                opponents=match_set.team_a,
                won=match_set.score_b > match_set.score_a,
                expected_score=team_b_expected,
                pre_elo=b1_pre,
                delta=team_b_delta,
                k_factor=k_factor,
                effective_k=effective_k,
            ),
            self._event(
                match_set,
                player=match_set.team_b2,
                partner=match_set.team_b1,
                opponents=match_set.team_a,
                won=match_set.score_b > match_set.score_a,
                expected_score=team_b_expected,
                pre_elo=b2_pre,
                delta=team_b_delta,
                k_factor=k_factor,
                effective_k=effective_k,
            ),
        ]

        for event in events:
            self._ratings[event.player] = event.post_elo
        return events

    def _event(
        self,
        match_set: MatchSet,
        *,
        player: str,
        partner: str,
        opponents: tuple[str, str],
        won: bool,
        expected_score: float,
        pre_elo: float,
        delta: float,
        k_factor: float,
        effective_k: float,
    ) -> PlayerSetEloEvent:
        return PlayerSetEloEvent(
            player=player,
            partner=partner,
            opponent1=opponents[0],
            opponent2=opponents[1],
            set_id=match_set.set_id,
            match_id=match_set.match_id,
            set_date=match_set.date,
            won=won,
            expected_score=expected_score,
            pre_elo=pre_elo,
            elo_delta=delta,
            post_elo=pre_elo + delta,
            k_factor=k_factor,
            adjusted_k_factor=effective_k,
            initial_elo=self.params.initial_elo,
        )


def compute_ratings(
    sets: Iterable[MatchSet],
    initial_ratings: Mapping[str, float],
    params: EloParameters | None = None,
) -> RatingComputation:
    """Replay sets in the given order and return final ratings plus per-set changes.

    Sets are processed exactly as supplied; callers sort them chronologically.
    ``initial_ratings`` is never mutated.
    """
    calculator = PadelEloCalculator(params or EloParameters(), initial_ratings=initial_ratings)
    changes: dict[int, dict[str, RatingChange]] = {}

    for match_set in sets:
        if match_set.set_id in changes:
            raise InvalidMatchSetError(f"set_id={match_set.set_id} appears more than once")
        events = calculator.process_set(match_set)
        changes[match_set.set_id] = {event.player: event.as_change() for event in events}

    return RatingComputation(final_ratings=calculator.ratings(), changes=changes)


__all__ = [
    "DEFAULT_PARTIAL_K_FACTORS",
    "EloParameters",
    "PadelEloCalculator",
    "PlayerSetEloEvent",
    "adjusted_k_factor",
    "base_k_factor",
    "calculate_expected_score",
    "compute_ratings",
    "validate_match_set",
]
