"""SQLAlchemy ORM models for jackpots, fixtures and stored predictions.

No relationships are declared; async sessions cannot lazy-load, so queries
join explicitly (see backend/jackpot/store.py).
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime

from sqlalchemy import DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    pass


class JackpotStatus(str, enum.Enum):
    ACTIVE = "active"
    COMPLETED = "completed"


class FixtureStatus(str, enum.Enum):
    PENDING = "pending"
    COMPLETED = "completed"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class Jackpot(Base):
    """A weekly jackpot: a bundle of fixtures bet on collectively."""

    __tablename__ = "jackpots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    amount: Mapped[str] = mapped_column(String(64), nullable=False)
    draw_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    status: Mapped[JackpotStatus] = mapped_column(
        Enum(JackpotStatus, native_enum=False, values_callable=_enum_values, length=16),
        default=JackpotStatus.ACTIVE,
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<Jackpot {self.id} {self.amount} ({self.status})>"


class Fixture(Base):
    """A single scheduled match inside a jackpot."""

    __tablename__ = "fixtures"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    jackpot_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("jackpots.id", ondelete="CASCADE"), nullable=False, index=True
    )
    home_team: Mapped[str] = mapped_column(String(128), nullable=False)
    away_team: Mapped[str] = mapped_column(String(128), nullable=False)
    match_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    league: Mapped[str | None] = mapped_column(String(128), nullable=True)
    status: Mapped[FixtureStatus] = mapped_column(
        Enum(FixtureStatus, native_enum=False, values_callable=_enum_values, length=16),
        default=FixtureStatus.PENDING,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Fixture {self.id} {self.home_team} vs {self.away_team}>"


class Prediction(Base):
    """A generated outcome prediction stored against one fixture."""

    __tablename__ = "predictions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    fixture_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("fixtures.id", ondelete="CASCADE"), nullable=False, index=True
    )
    outcome: Mapped[str] = mapped_column(String(1), nullable=False)  # "1", "X", "2"
    confidence: Mapped[int] = mapped_column(Integer, nullable=False)
    reasoning: Mapped[str | None] = mapped_column(Text, nullable=True)
    strategy: Mapped[str] = mapped_column(String(32), nullable=False, default="balanced")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return f"<Prediction fixture={self.fixture_id} {self.outcome} ({self.confidence})>"
