"""Database model for registered players."""
from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from stopwatch.db.base import Base

if TYPE_CHECKING:
    from .score import Score


class User(Base):
    """Player account with a salted, peppered password hash."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    password_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    salt: Mapped[str] = mapped_column(String(64), nullable=False)

    scores: Mapped[list[Score]] = relationship("Score", back_populates="author")
