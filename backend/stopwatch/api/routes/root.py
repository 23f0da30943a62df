"""Service banner listing the public endpoints."""
from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["root"])

ENDPOINTS = {
    "register": "POST /users/new",
    "login": "POST /users/login",
    "getScores": "GET /scores (Auth Required)",
    "postScore": "POST /scores (Auth Required)",
}


@router.get("/")
async def welcome() -> dict:
    return {"message": "Welcome to the Stopwatch Game API!", "endpoints": ENDPOINTS}
