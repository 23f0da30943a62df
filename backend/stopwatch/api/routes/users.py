"""Registration and login endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from stopwatch.core.dependencies import get_credential_hasher, get_db, get_token_service
from stopwatch.core.errors import AuthError, ConflictError, ServerError
from stopwatch.core.security import CredentialHasher, TokenService
from stopwatch.schemas.auth import Credentials, LoginResponse
from stopwatch.schemas.user import UserCreated
from stopwatch.services.users import UserExistsError, authenticate_user, create_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/new", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
async def register_user(
    payload: Credentials,
    session: AsyncSession = Depends(get_db),
    hasher: CredentialHasher = Depends(get_credential_hasher),
) -> UserCreated:
    try:
        user = await create_user(session, payload.name, payload.password, hasher)
        await session.commit()
    except UserExistsError as exc:
        raise ConflictError("User already exists.") from exc
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("User registration failed")
        raise ServerError("User registration failed due to a server error.") from exc

    logger.info("Registered user %s (id=%s)", user.name, user.id)
    return UserCreated(id=user.id, name=user.name)


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: Credentials,
    session: AsyncSession = Depends(get_db),
    hasher: CredentialHasher = Depends(get_credential_hasher),
    tokens: TokenService = Depends(get_token_service),
) -> LoginResponse:
    try:
        user = await authenticate_user(session, payload.name, payload.password, hasher)
    except SQLAlchemyError as exc:
        logger.exception("Login failed")
        raise ServerError("Login failed due to a server error.") from exc

    if not user:
        logger.warning("Rejected login attempt")
        raise AuthError("Invalid credentials.")

    logger.info("Login: %s (id=%s)", user.name, user.id)
    return LoginResponse(token=tokens.issue(user))
