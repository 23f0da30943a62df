"""Database model for submitted stopwatch scores."""
from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stopwatch.db.base import Base

from .user import User


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Score(Base):
    """A single score submission tied to its author."""

    __tablename__ = "scores"

    id: Mapped[int] = mapped_column(primary_key=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    author_id: Mapped[int] = mapped_column(ForeignKey("users.id"), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)

    author: Mapped[User] = relationship("User", back_populates="scores")
