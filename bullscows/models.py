"""
SQLAlchemy ORM models.

Tables:
- games: one row per game (secret stored as JSON, plus status/turn counter)
- guesses: one row per guess (history, with the bulls/cows answer)
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import (
    String, Integer, DateTime, Enum, ForeignKey, JSON,
)
from sqlalchemy.orm import relationship, Mapped, mapped_column
from .db import Base
from .types import GameStatus

class Game(Base):
    __tablename__ = "games"

    # UUIDs generated in code; stored as strings
    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    # Secret code (list[int], 4 different digits 0..9)
    secret: Mapped[list[int]] = mapped_column(JSON, nullable=False)

    status: Mapped[GameStatus] = mapped_column(
        Enum("in_progress", "won", name="game_status"),
        nullable=False,
        default="in_progress",
    )
    turns: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    guesses: Mapped[list["Guess"]] = relationship(
        back_populates="game",
        cascade="all, delete-orphan",
        order_by="Guess.id.asc()",
    )

class Guess(Base):
    __tablename__ = "guesses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    game_id: Mapped[str] = mapped_column(String(36), ForeignKey("games.id", ondelete="CASCADE"), index=True)
    game: Mapped[Game] = relationship(back_populates="guesses")

    guess: Mapped[list[int]] = mapped_column(JSON, nullable=False)

    # Responder output
    bulls: Mapped[int] = mapped_column(Integer, nullable=False)
    cows: Mapped[int] = mapped_column(Integer, nullable=False)
    message: Mapped[str] = mapped_column(String(255), nullable=False)

    timestamp: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
