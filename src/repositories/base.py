"""Persistence for rows derived from one Elo system replay."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, insert, select
from sqlalchemy.orm import Session

from domain.ratings.elo.config import EloSystemConfig
from models import EloSystem

RowT = TypeVar("RowT")


class EloDerivedTable(Generic[RowT]):
    """A table whose rows are rebuilt wholesale for each ``elo_systems`` row.

    ``to_row`` turns one domain object into an insert payload for the given
    system id.
    """

    def __init__(
        self,
        *,
        model: type[Any],
        to_row: Callable[[RowT, int], dict[str, Any]],
    ) -> None:
        self.model = model
        self.to_row = to_row

    def register_system(self, session: Session, system_config: EloSystemConfig) -> EloSystem:
        """Insert or refresh the ``elo_systems`` row for a config and return it."""
        system = session.execute(
            select(EloSystem).where(EloSystem.name == system_config.name)
        ).scalar_one_or_none()
        if system is None:
            system = EloSystem(name=system_config.name)
            session.add(system)

        system.description = system_config.description
        system.config_file = system_config.file_path.name
        system.config_json = system_config.as_config_json()
        system.rebuilt_at = datetime.now(UTC).replace(tzinfo=None)
        session.flush()
        return system

    def clear(self, session: Session, system_id: int) -> None:
        session.execute(delete(self.model).where(self.model.elo_system_id == system_id))

    def write(self, session: Session, items: Sequence[RowT], *, system_id: int) -> int:
        if not items:
            return 0
        session.execute(insert(self.model), [self.to_row(item, system_id) for item in items])
        return len(items)

    def count_players(self, session: Session, *, system_id: int) -> int:
        """Distinct players with at least one row for ``system_id``."""
        statement = select(func.count(func.distinct(self.model.player))).where(
            self.model.elo_system_id == system_id
        )
        return int(session.scalar(statement) or 0)


__all__ = ["EloDerivedTable"]
