"""API router aggregator."""
from fastapi import APIRouter

from stopwatch.api.routes import root, scores, users

api_router = APIRouter()
api_router.include_router(root.router)
api_router.include_router(users.router)
api_router.include_router(scores.router)

__all__ = ["api_router"]
