"""Leaderboard endpoints. Both require a bearer token."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stopwatch.core.dependencies import AuthContext, get_current_identity, get_db
from stopwatch.core.errors import AuthError, ServerError
from stopwatch.schemas.score import LeaderboardEntry, ScoreCreate, ScoreRead
from stopwatch.services import scores as score_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scores", tags=["scores"])


@router.get("", response_model=list[LeaderboardEntry])
async def list_top_scores(
    session: AsyncSession = Depends(get_db),
    _: AuthContext = Depends(get_current_identity),
) -> list[LeaderboardEntry]:
    try:
        scores = await score_service.top_scores(session)
    except SQLAlchemyError as exc:
        logger.exception("Fetching top scores failed")
        raise ServerError("Failed to retrieve scores.") from exc
    return [LeaderboardEntry.model_validate(score) for score in scores]


@router.post("", response_model=ScoreRead, status_code=status.HTTP_201_CREATED)
async def submit_score(
    payload: ScoreCreate,
    session: AsyncSession = Depends(get_db),
    identity: AuthContext = Depends(get_current_identity),
) -> ScoreRead:
    if not identity.id:
        raise AuthError("User ID not found in token.", status_code=status.HTTP_403_FORBIDDEN)

    try:
        score = await score_service.create_score(session, identity.id, payload.as_points())
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Saving score for user %s failed", identity.id)
        raise ServerError("Failed to save score.") from exc

    logger.info("User %s submitted score %s", identity.name, score.score)
    return ScoreRead.model_validate(score)
