"""player_set_elo table model."""

from __future__ import annotations

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class PlayerSetElo(Base):
    """Historical player Elo events (one row per player per set)."""

    __tablename__ = "player_set_elo"
    __table_args__ = (
        UniqueConstraint("elo_system_id", "player", "set_id", name="uq_player_set_elo_system_player_set"),
        CheckConstraint(
            "expected_score >= 0.0 AND expected_score <= 1.0",
            name="ck_player_set_elo_expected_score",
        ),
        Index("idx_player_set_elo_system_player", "elo_system_id", "player", "set_date", "set_id"),
        Index("idx_player_set_elo_set", "set_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    elo_system_id: Mapped[int] = mapped_column(ForeignKey("elo_systems.id"), nullable=False)
    player: Mapped[str] = mapped_column(String(128), nullable=False)
    partner: Mapped[str] = mapped_column(String(128), nullable=False)
    opponent1: Mapped[str] = mapped_column(String(128), nullable=False)
    opponent2: Mapped[str] = mapped_column(String(128), nullable=False)
    set_id: Mapped[int] = mapped_column(Integer, nullable=False)
    match_id: Mapped[int] = mapped_column(Integer, nullable=False)
    set_date: Mapped[date] = mapped_column(Date, nullable=False)
    won: Mapped[bool] = mapped_column(Boolean, nullable=False)
    expected_score: Mapped[float] = mapped_column(Float, nullable=False)
    pre_elo: Mapped[float] = mapped_column(Float, nullable=False)
    elo_delta: Mapped[float] = mapped_column(Float, nullable=False)
    post_elo: Mapped[float] = mapped_column(Float, nullable=False)
    k_factor: Mapped[float] = mapped_column(Float, nullable=False)
    adjusted_k_factor: Mapped[float] = mapped_column(Float, nullable=False)
    initial_elo: Mapped[float] = mapped_column(Float, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
