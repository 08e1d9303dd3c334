"""Padel rating domain modules."""

from domain.ratings.common import MatchSet, RatingChange, RatingComputation, TiebreakKind

__all__ = ["MatchSet", "RatingChange", "RatingComputation", "TiebreakKind"]
