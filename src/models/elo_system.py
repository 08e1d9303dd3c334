"""elo_systems table model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, JSONType


class EloSystem(Base):
    """One named padel Elo configuration and the TOML file it was loaded from.

    ``config_json`` holds the parameters used by the most recent rebuild so
    stored events can be traced back to the exact K table that produced them.
    """

    __tablename__ = "elo_systems"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False, unique=True, index=True)
    description: Mapped[str | None] = mapped_column(String(512), nullable=True)
    config_file: Mapped[str | None] = mapped_column(String(255), nullable=True)
    config_json: Mapped[dict[str, Any]] = mapped_column(JSONType, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
    rebuilt_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
