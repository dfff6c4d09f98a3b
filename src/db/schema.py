"""Database tables / schema"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import JSON, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class DBGame(Base):
    __tablename__ = "games"
    room_code: Mapped[str] = mapped_column(String(16), primary_key=True)
    history: Mapped[list[str]] = mapped_column(JSON, default=list)
    registered_players: Mapped[dict[str, str]] = mapped_column(JSON)
    current_player: Mapped[int]
    status: Mapped[str]
    ai_difficulty: Mapped[Optional[str]]
    created_at: Mapped[datetime] = mapped_column(default=utc_now)
    updated_at: Mapped[datetime] = mapped_column(default=utc_now, onupdate=utc_now)
