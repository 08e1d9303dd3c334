"""match_sets table model."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class MatchSetRow(Base):
    """One played set between two doubles pairs."""

    __tablename__ = "match_sets"
    __table_args__ = (
        CheckConstraint("score_a >= 0 AND score_b >= 0", name="ck_match_sets_scores"),
        Index("idx_match_sets_date", "set_date", "id"),
        Index("idx_match_sets_match", "match_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    match_id: Mapped[int] = mapped_column(Integer, nullable=False)
    set_date: Mapped[date] = mapped_column(Date, nullable=False)
    team_a1: Mapped[str] = mapped_column(String(128), nullable=False)
    team_a2: Mapped[str] = mapped_column(String(128), nullable=False)
    team_b1: Mapped[str] = mapped_column(String(128), nullable=False)
    team_b2: Mapped[str] = mapped_column(String(128), nullable=False)
    score_a: Mapped[float] = mapped_column(Float, nullable=False)
    score_b: Mapped[float] = mapped_column(Float, nullable=False)
    finished: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    is_event: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    tiebreak: Mapped[str | None] = mapped_column(String(32), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
