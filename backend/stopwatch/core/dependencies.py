"""Reusable dependencies for FastAPI routes."""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass

from fastapi import Depends, Request
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.ext.asyncio import AsyncSession

from stopwatch.core.config import Settings, get_settings
from stopwatch.core.errors import AuthError
from stopwatch.core.security import CredentialHasher, InvalidToken, TokenService
from stopwatch.db.session import get_session
from stopwatch.services.users import get_user

logger = logging.getLogger(__name__)

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


@dataclass(frozen=True)
class AuthContext:
    """Verified identity of the caller, handed to protected routes."""

    id: int
    name: str


async def get_db() -> AsyncIterator[AsyncSession]:
    async with get_session() as session:
        yield session


def get_credential_hasher(settings: Settings = Depends(get_settings)) -> CredentialHasher:
    return CredentialHasher.from_settings(settings)


def get_token_service(settings: Settings = Depends(get_settings)) -> TokenService:
    return TokenService.from_settings(settings)


def bearer_token(authorization: str | None) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header value."""

    if not authorization:
        raise AuthError("Access denied. No token provided.", headers=BEARER_CHALLENGE)
    scheme, token = get_authorization_scheme_param(authorization)
    if scheme != "Bearer" or not token or " " in token:
        raise AuthError("Invalid authorization header format.", headers=BEARER_CHALLENGE)
    return token


async def get_current_identity(
    request: Request,
    session: AsyncSession = Depends(get_db),
    tokens: TokenService = Depends(get_token_service),
) -> AuthContext:
    token = bearer_token(request.headers.get("Authorization"))
    try:
        claims = tokens.verify(token)
    except InvalidToken as exc:
        logger.warning("Rejected bearer token on %s: %s", request.url.path, exc)
        raise AuthError("Invalid token.", headers=BEARER_CHALLENGE) from exc

    # Accounts that no longer exist lose access immediately.
    user = await get_user(session, claims.id)
    if not user or user.name != claims.name:
        logger.warning("Rejected token for unknown user id %s", claims.id)
        raise AuthError("Invalid token.", headers=BEARER_CHALLENGE)

    return AuthContext(id=claims.id, name=claims.name)
