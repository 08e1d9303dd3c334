"""Load padel Elo system definitions from TOML files.

Each ``*.toml`` file in the config directory describes one named system:

    [system]
    name = "padel_elo_default"

    [elo]
    k_factor = 32.0

    [elo.partial_k_factors]
    4 = 8.0

Omitted values fall back to the ``EloParameters`` defaults.
"""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from math import isfinite
from pathlib import Path
from types import MappingProxyType
from typing import Any

from domain.ratings.elo.calculator import DEFAULT_PARTIAL_K_FACTORS, EloParameters


@dataclass(frozen=True)
class EloSystemConfig:
    """Configuration for one padel Elo system rebuild."""

    name: str
    description: str | None
    file_path: Path
    parameters: EloParameters

    def as_config_json(self) -> dict[str, Any]:
        return {
            "initial_elo": self.parameters.initial_elo,
            "k_factor": self.parameters.k_factor,
            "scale_factor": self.parameters.scale_factor,
            "tiebreak_k_factor": self.parameters.tiebreak_k_factor,
            "match_tiebreak_k_factor": self.parameters.match_tiebreak_k_factor,
            "event_multiplier": self.parameters.event_multiplier,
            "partial_k_factors": {
                str(max_score): k_factor
                for max_score, k_factor in sorted(self.parameters.partial_k_factors.items())
            },
            "reject_finished_draws": self.parameters.reject_finished_draws,
        }


def load_elo_system_configs(config_dir: Path) -> list[EloSystemConfig]:
    """Load and validate all Elo system TOML config files in a directory.

    Files are read in name order; system names must be unique across the
    directory.
    """
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    systems: list[EloSystemConfig] = []
    for file_path in config_files:
        with file_path.open("rb") as file:
            systems.append(_parse_elo_system_config(tomllib.load(file), file_path))

    names = [system.name for system in systems]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"Duplicate elo system names in {config_dir}: {duplicates}")

    return systems


def _parse_elo_system_config(raw: dict[str, Any], file_path: Path) -> EloSystemConfig:
    system_raw = raw.get("system", {})
    elo_raw = raw.get("elo", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError(f"{file_path}: [system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)

    parameters = EloParameters(
        initial_elo=float(elo_raw.get("initial_elo", 1500.0)),
        k_factor=float(elo_raw.get("k_factor", 32.0)),
        scale_factor=float(elo_raw.get("scale_factor", 400.0)),
        tiebreak_k_factor=float(elo_raw.get("tiebreak_k_factor", 8.0)),
        match_tiebreak_k_factor=float(elo_raw.get("match_tiebreak_k_factor", 16.0)),
        event_multiplier=float(elo_raw.get("event_multiplier", 2.0)),
        partial_k_factors=_parse_partial_k_factors(
            elo_raw.get("partial_k_factors"),
            file_path=file_path,
        ),
        reject_finished_draws=_parse_reject_finished_draws(
            elo_raw.get("reject_finished_draws", True),
            file_path=file_path,
        ),
    )
    _validate_parameters(file_path=file_path, parameters=parameters)

    return EloSystemConfig(
        name=name,
        description=description,
        file_path=file_path,
        parameters=parameters,
    )


def _parse_partial_k_factors(raw: Any, *, file_path: Path) -> Mapping[int, float]:
    if raw is None:
        return DEFAULT_PARTIAL_K_FACTORS
    if not isinstance(raw, dict):
        raise ValueError(f"{file_path}: [elo.partial_k_factors] must be a table")

    parsed: dict[int, float] = {}
    for key, value in raw.items():
        try:
            max_score = int(key)
        except ValueError as exc:
            raise ValueError(
                f"{file_path}: [elo.partial_k_factors] key {key!r} must be an integer score"
            ) from exc
        if max_score < 0:
            raise ValueError(f"{file_path}: [elo.partial_k_factors] key {key!r} must be >= 0")
        parsed[max_score] = float(value)
    return MappingProxyType(parsed)


def _parse_reject_finished_draws(raw: Any, *, file_path: Path) -> bool:
    if not isinstance(raw, bool):
        raise ValueError(f"{file_path}: [elo].reject_finished_draws must be true or false")
    return raw


def _validate_parameters(*, file_path: Path, parameters: EloParameters) -> None:
    for field_name in (
        "initial_elo",
        "k_factor",
        "scale_factor",
        "tiebreak_k_factor",
        "match_tiebreak_k_factor",
        "event_multiplier",
    ):
        value = getattr(parameters, field_name)
        if not isfinite(value):
            raise ValueError(f"{file_path}: [elo].{field_name} must be finite")
        if value <= 0.0:
            raise ValueError(f"{file_path}: [elo].{field_name} must be > 0")
    for max_score, k_factor in parameters.partial_k_factors.items():
        if not isfinite(k_factor):
            raise ValueError(f"{file_path}: [elo.partial_k_factors].{max_score} must be finite")
        if k_factor < 0.0:
            raise ValueError(
                f"{file_path}: [elo.partial_k_factors].{max_score} must be >= 0"
            )


__all__ = ["EloSystemConfig", "load_elo_system_configs"]
