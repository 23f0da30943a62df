"""User service functions for registration and authentication."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from stopwatch.core.security import CredentialHasher
from stopwatch.models.user import User

logger = logging.getLogger(__name__)

# Hashed against on unknown names so both login failure paths cost one digest.
_DUMMY_SALT = "0" * 32
_DUMMY_HASH = "0" * 64


class UserExistsError(ValueError):
    """Raised when a name is already registered."""


async def get_user(session: AsyncSession, user_id: int) -> User | None:
    return await session.get(User, user_id)


async def get_user_by_name(session: AsyncSession, name: str) -> User | None:
    result = await session.execute(select(User).where(User.name == name))
    return result.scalar_one_or_none()


async def create_user(session: AsyncSession, name: str, password: str, hasher: CredentialHasher) -> User:
    if await get_user_by_name(session, name):
        raise UserExistsError(name)

    salt = hasher.generate_salt()
    user = User(name=name, password_hash=hasher.hash(password, salt), salt=salt)
    session.add(user)
    try:
        await session.flush()
    except IntegrityError as exc:
        # Lost a race with a concurrent registration of the same name.
        await session.rollback()
        raise UserExistsError(name) from exc
    return user


async def authenticate_user(
    session: AsyncSession, name: str, password: str, hasher: CredentialHasher
) -> User | None:
    user = await get_user_by_name(session, name)
    if not user:
        hasher.verify(password, _DUMMY_SALT, _DUMMY_HASH)
        return None
    if not hasher.verify(password, user.salt, user.password_hash):
        return None
    return user
