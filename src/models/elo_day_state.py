"""elo_day_state table model."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, Float, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class EloDayState(Base):
    """Rating each player carried into a day they played."""

    __tablename__ = "elo_day_state"
    __table_args__ = (
        UniqueConstraint("elo_system_id", "state_date", "player", name="uq_elo_day_state_system_date_player"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    elo_system_id: Mapped[int] = mapped_column(ForeignKey("elo_systems.id"), nullable=False)
    state_date: Mapped[date] = mapped_column(Date, nullable=False)
    player: Mapped[str] = mapped_column(String(128), nullable=False)
    elo_start: Mapped[float] = mapped_column(Float, nullable=False)
    sets_played: Mapped[int] = mapped_column(Integer, nullable=False)
