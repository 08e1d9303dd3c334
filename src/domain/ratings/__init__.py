"""Rating-system domain modules."""

from domain.ratings.common import (
    InvalidMatchSetError,
    MatchSet,
    PlayerProfile,
    RatingChange,
    RatingComputation,
    TiebreakKind,
)

__all__ = [
    "InvalidMatchSetError",
    "MatchSet",
    "PlayerProfile",
    "RatingChange",
    "RatingComputation",
    "TiebreakKind",
]
