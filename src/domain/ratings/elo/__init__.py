"""Elo rating modules."""

from domain.ratings.elo.calculator import (
    DEFAULT_PARTIAL_K_FACTORS,
    EloParameters,
    PadelEloCalculator,
    PlayerSetEloEvent,
    adjusted_k_factor,
    base_k_factor,
    calculate_expected_score,
    compute_ratings,
    validate_match_set,
)
from domain.ratings.elo.config import EloSystemConfig, load_elo_system_configs

__all__ = [
    "DEFAULT_PARTIAL_K_FACTORS",
    "EloParameters",
    "EloSystemConfig",
    "PadelEloCalculator",
    "PlayerSetEloEvent",
    "adjusted_k_factor",
    "base_k_factor",
    "calculate_expected_score",
    "compute_ratings",
    "load_elo_system_configs",
    "validate_match_set",
]
