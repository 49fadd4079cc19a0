"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import JSON
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    id: Mapped[UUID] = mapped_column(primary_key=True)
    phase: Mapped[str]
    active_player: Mapped[str]
    board: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    scores: Mapped[dict[str, int]] = mapped_column(JSON)
    captured: Mapped[dict[str, list[dict[str, Any]]]] = mapped_column(JSON)
    piece_counts: Mapped[dict[str, int]] = mapped_column(JSON)
    move_history: Mapped[list[dict[str, Any]]] = mapped_column(JSON, default=list)
    selections: Mapped[dict[str, dict[str, int]]] = mapped_column(JSON)
    rosters: Mapped[dict[str, list[dict[str, Any]]]] = mapped_column(JSON)
    active: Mapped[bool] = mapped_column(default=False)
    winner: Mapped[Optional[str]]
    version: Mapped[int] = mapped_column(default=0)
    ai_difficulty: Mapped[Optional[str]]
    ai_color: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
