"""Shared types for padel rating calculations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any


class TiebreakKind(str, Enum):
    """How a set was decided when it did not end on games."""

    NONE = "none"
    TIEBREAK = "tiebreak"
    MATCH_TIEBREAK = "matchtiebreak"

    @classmethod
    def parse(cls, value: Any) -> TiebreakKind:
        """Normalise stored tiebreak values (enum, string, bool or None)."""
        if isinstance(value, TiebreakKind):
            return value
        if value is None or value is False:
            return cls.NONE
        normalised = str(value).strip().lower().replace("_", "").replace(" ", "")
        if normalised in ("", "none", "ingen", "false", "0"):
            return cls.NONE
        if normalised in ("tiebreak", "true", "1"):
            return cls.TIEBREAK
        if normalised == "matchtiebreak":
            return cls.MATCH_TIEBREAK
        raise ValueError(f"Unknown tiebreak kind: {value!r}")


class InvalidMatchSetError(ValueError):
    """Raised when a set cannot be rated."""


@dataclass(frozen=True)
class MatchSet:
    """One played set between two fixed doubles pairs."""

    set_id: int
    match_id: int
    date: date
    team_a1: str
    team_a2: str
    team_b1: str
    team_b2: str
    score_a: float
    score_b: float
    finished: bool = True
    is_event: bool = False
    tiebreak: TiebreakKind = TiebreakKind.NONE

    @property
    def team_a(self) -> tuple[str, str]:
        return (self.team_a1, self.team_a2)

    @property
    def team_b(self) -> tuple[str, str]:
        return (self.team_b1, self.team_b2)

    @property
    def players(self) -> tuple[str, str, str, str]:
        return (self.team_a1, self.team_a2, self.team_b1, self.team_b2)


@dataclass(frozen=True)
class RatingChange:
    before: float
    after: float
    diff: float


@dataclass(frozen=True)
class RatingComputation:
    """Result of replaying a sequence of sets."""

    final_ratings: dict[str, float]
    changes: dict[int, dict[str, RatingChange]] = field(default_factory=dict)


@dataclass(frozen=True)
class PlayerProfile:
    """Player metadata used to seed leaderboards."""

    name: str
    start_rating: float | None = None
    active: bool = True


__all__ = [
    "InvalidMatchSetError",
    "MatchSet",
    "PlayerProfile",
    "RatingChange",
    "RatingComputation",
    "TiebreakKind",
]
