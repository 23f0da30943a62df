"""Service layer for score persistence and the leaderboard."""
from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from stopwatch.models.score import Score

LEADERBOARD_SIZE = 5


async def top_scores(session: AsyncSession, limit: int = LEADERBOARD_SIZE) -> list[Score]:
    result = await session.execute(
        select(Score)
        .options(selectinload(Score.author))
        .order_by(Score.score.desc(), Score.id)
        .limit(limit)
    )
    return list(result.scalars().all())


async def create_score(session: AsyncSession, author_id: int, points: int) -> Score:
    score = Score(score=points, author_id=author_id)
    session.add(score)
    await session.flush()
    return score
