"""Read helpers for played sets and player profiles."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from sqlalchemy import insert, select
from sqlalchemy.orm import Session

from domain.ratings.common import MatchSet, PlayerProfile, TiebreakKind
from models import LunarPlayer, MatchSetRow, Player

logger = logging.getLogger(__name__)


def fetch_match_sets(
    session: Session,
    *,
    start: date | None = None,
    end_exclusive: date | None = None,
) -> list[MatchSet]:
    """Fetch sets in deterministic chronological order (date, then id)."""
    statement = select(MatchSetRow).order_by(MatchSetRow.set_date, MatchSetRow.id)
    if start is not None:
        statement = statement.where(MatchSetRow.set_date >= start)
    if end_exclusive is not None:
        statement = statement.where(MatchSetRow.set_date < end_exclusive)

    rows = session.execute(statement).scalars().all()
    match_sets = [_row_to_match_set(row) for row in rows]
    logger.debug("fetched %d match sets (start=%s end_exclusive=%s)", len(match_sets), start, end_exclusive)
    return match_sets


def fetch_player_profiles(session: Session) -> list[PlayerProfile]:
    """Fetch every player profile ordered by display name."""
    rows = session.execute(select(Player).order_by(Player.display_name)).scalars().all()
    profiles: list[PlayerProfile] = []
    for row in rows:
        name = row.display_name.strip()
        if not name:
            continue
        profiles.append(PlayerProfile(name=name, start_rating=row.start_elo, active=row.active))
    return profiles


def fetch_start_ratings(session: Session) -> dict[str, float]:
    """Start ratings for players that have one; others fall back to the baseline."""
    return {
        profile.name: profile.start_rating
        for profile in fetch_player_profiles(session)
        if profile.start_rating is not None
    }


def fetch_lunar_bonuses(session: Session) -> dict[str, float]:
    """Bonus points per Lunar entrant; the keys are the season's players."""
    rows = session.execute(select(LunarPlayer).order_by(LunarPlayer.display_name)).scalars().all()
    return {row.display_name.strip(): row.bonus_points for row in rows if row.display_name.strip()}


def insert_match_sets(session: Session, match_sets: Sequence[MatchSet]) -> None:
    """Bulk insert sets, keeping their ids."""
    if not match_sets:
        return

    payload = [
        {
            "id": match_set.set_id,
            "match_id": match_set.match_id,
            "set_date": match_set.date,
            "team_a1": match_set.team_a1,
            "team_a2": match_set.team_a2,
            "team_b1": match_set.team_b1,
            "team_b2": match_set.team_b2,
            "score_a": match_set.score_a,
            "score_b": match_set.score_b,
            "finished": match_set.finished,
            "is_event": match_set.is_event,
            "tiebreak": match_set.tiebreak.value,
        }
        for match_set in match_sets
    ]
    session.execute(insert(MatchSetRow), payload)


def _row_to_match_set(row: MatchSetRow) -> MatchSet:
    return MatchSet(
        set_id=row.id,
        match_id=row.match_id,
        date=row.set_date,
        team_a1=row.team_a1.strip(),
        team_a2=row.team_a2.strip(),
        team_b1=row.team_b1.strip(),
        team_b2=row.team_b2.strip(),
        score_a=row.score_a,
        score_b=row.score_b,
        finished=row.finished,
        is_event=row.is_event,
        tiebreak=TiebreakKind.parse(row.tiebreak),
    )


__all__ = [
    "fetch_lunar_bonuses",
    "fetch_match_sets",
    "fetch_player_profiles",
    "fetch_start_ratings",
    "insert_match_sets",
]
