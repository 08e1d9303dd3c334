"""Rebuild jobs: replay every stored set and replace the derived tables."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.orm import Session, sessionmaker

from domain.ratings.day_state import build_day_states
from domain.ratings.elo.calculator import PadelEloCalculator, PlayerSetEloEvent
from domain.ratings.elo.config import EloSystemConfig
from repositories.definitions import ELO_DAY_STATE_TABLE, PLAYER_SET_ELO_TABLE
from repositories.match_sets import fetch_match_sets, fetch_start_ratings

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]
PROGRESS_EVERY_SETS = 10_000


@dataclass(frozen=True)
class RebuildSummary:
    """Outcome for one rebuilt system config."""

    system_name: str
    config_file: str
    system_id: int | None
    processed_sets: int
    inserted_events: int
    tracked_players: int
    dry_run: bool


def rebuild_elo_system(
    *,
    session_factory: sessionmaker[Session],
    system_config: EloSystemConfig,
    batch_size: int = 5000,
    dry_run: bool = False,
    echo: Echo | None = None,
) -> RebuildSummary:
    """Replay all sets for one config and replace its ``player_set_elo`` rows.

    The delete and every insert batch share one transaction, so a failing
    set leaves the previous rows in place. A dry run replays in memory and
    writes nothing.
    """
    if batch_size <= 0:
        raise ValueError("batch_size must be greater than 0")

    config_file = system_config.file_path.name

    with session_factory() as session:
        match_sets = fetch_match_sets(session)
        calculator = PadelEloCalculator(
            system_config.parameters,
            initial_ratings=fetch_start_ratings(session),
        )

        if dry_run:
            for match_set in match_sets:
                calculator.process_set(match_set)
            summary = RebuildSummary(
                system_name=system_config.name,
                config_file=config_file,
                system_id=None,
                processed_sets=len(match_sets),
                inserted_events=0,
                tracked_players=calculator.tracked_player_count(),
                dry_run=True,
            )
            _report(
                echo,
                f"[dry-run] config={config_file} system={summary.system_name} "
                f"processed_sets={summary.processed_sets} tracked_players={summary.tracked_players}",
            )
            return summary

        inserted = 0
        pending: list[PlayerSetEloEvent] = []
        try:
            system_id = PLAYER_SET_ELO_TABLE.register_system(session, system_config).id
            PLAYER_SET_ELO_TABLE.clear(session, system_id)

            for index, match_set in enumerate(match_sets, start=1):
                pending.extend(calculator.process_set(match_set))
                if len(pending) >= batch_size:
                    inserted += PLAYER_SET_ELO_TABLE.write(session, pending, system_id=system_id)
                    pending.clear()
                if index % PROGRESS_EVERY_SETS == 0:
                    _report(echo, f"config={config_file} processed_sets={index}/{len(match_sets)}")

            inserted += PLAYER_SET_ELO_TABLE.write(session, pending, system_id=system_id)
            session.commit()
        except Exception:
            session.rollback()
            raise

        summary = RebuildSummary(
            system_name=system_config.name,
            config_file=config_file,
            system_id=system_id,
            processed_sets=len(match_sets),
            inserted_events=inserted,
            tracked_players=PLAYER_SET_ELO_TABLE.count_players(session, system_id=system_id),
            dry_run=False,
        )

    _report(
        echo,
        f"completed config={config_file} system={summary.system_name} system_id={system_id} "
        f"processed_sets={summary.processed_sets} inserted_events={inserted} "
        f"tracked_players={summary.tracked_players}",
    )
    return summary


def rebuild_day_states(
    *,
    session_factory: sessionmaker[Session],
    system_config: EloSystemConfig,
    dry_run: bool = False,
    echo: Echo | None = None,
) -> int:
    """Recompute start-of-day ratings for one config and replace its ``elo_day_state`` rows."""
    with session_factory() as session:
        match_sets = fetch_match_sets(session)
        if not match_sets:
            _report(echo, f"system={system_config.name} no sets found, nothing to build")
            return 0

        states = build_day_states(match_sets, fetch_start_ratings(session), system_config.parameters)
        if dry_run:
            _report(echo, f"[dry-run] system={system_config.name} day_states={len(states)}")
            return len(states)

        try:
            system_id = ELO_DAY_STATE_TABLE.register_system(session, system_config).id
            ELO_DAY_STATE_TABLE.clear(session, system_id)
            written = ELO_DAY_STATE_TABLE.write(session, states, system_id=system_id)
            session.commit()
        except Exception:
            session.rollback()
            raise

    _report(echo, f"completed system={system_config.name} day_states={written}")
    return written


def _report(echo: Echo | None, message: str) -> None:
    if echo is None:
        logger.info(message)
    else:
        echo(message)


__all__ = ["RebuildSummary", "rebuild_day_states", "rebuild_elo_system"]
