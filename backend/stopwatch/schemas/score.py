"""Pydantic schemas for score submission and the leaderboard."""
from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

# Largest value a signed 64-bit INTEGER column holds.
MAX_SCORE = 2**63 - 1


class ScoreCreate(BaseModel):
    score: float = Field(..., ge=0)

    @model_validator(mode="before")
    @classmethod
    def _require_number(cls, data: Any) -> Any:
        # JSON numbers only: no numeric strings, booleans, null or NaN/Infinity.
        value = data.get("score") if isinstance(data, dict) else None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise PydanticCustomError("score_type", "Score must be a number.")
        if isinstance(value, float) and not math.isfinite(value):
            raise PydanticCustomError("score_type", "Score must be a number.")
        # Compared before the float conversion so huge ints never reach it.
        if value > MAX_SCORE:
            raise PydanticCustomError("score_range", "Score is too large.")
        return data

    def as_points(self) -> int:
        # Floats near the bound can round up past it.
        return min(math.floor(self.score), MAX_SCORE)


class ScoreRead(BaseModel):
    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)

    id: int
    score: int
    author_id: int
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # SQLite hands timestamps back without their offset; they are stored as UTC.
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


class AuthorRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str


class LeaderboardEntry(ScoreRead):
    author: AuthorRead
