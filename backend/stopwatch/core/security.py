"""Security helpers for credential hashing and bearer token signing."""
from __future__ import annotations

import hashlib
import hmac
import math
import secrets
import time
from datetime import timedelta
from typing import Callable, Protocol

from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict, StrictInt, StrictStr, ValidationError

from .config import Settings

SALT_BYTES = 16


def hash_credentials(password: str, salt: str, pepper: str) -> str:
    """Return the hex SHA-256 digest of ``password + salt + pepper``."""

    return hashlib.sha256((password + salt + pepper).encode("utf-8")).hexdigest()


class CredentialHasher:
    """Salted and peppered password hashing.

    The pepper is a single process-wide secret handed in at construction; it
    is never stored next to a user record. Each user gets a fresh random salt
    at registration.
    """

    def __init__(self, pepper: str) -> None:
        if not pepper:
            raise ValueError("pepper must not be empty")
        self._pepper = pepper

    @classmethod
    def from_settings(cls, settings: Settings) -> CredentialHasher:
        return cls(settings.pepper.get_secret_value())

    @staticmethod
    def generate_salt() -> str:
        return secrets.token_hex(SALT_BYTES)

    def hash(self, password: str, salt: str) -> str:
        return hash_credentials(password, salt, self._pepper)

    def verify(self, password: str, salt: str, expected_hash: str) -> bool:
        return hmac.compare_digest(self.hash(password, salt), expected_hash)


class InvalidToken(ValueError):
    """Raised when a bearer token cannot be trusted."""


class TokenClaims(BaseModel):
    """Fixed claim set carried by every session token."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: StrictInt
    name: StrictStr
    exp: StrictInt


class Identity(Protocol):
    id: int
    name: str


class TokenService:
    """Issue and verify signed, time-limited session tokens."""

    def __init__(
        self,
        secret: str,
        lifetime: timedelta = timedelta(hours=1),
        algorithm: str = "HS256",
        clock: Callable[[], float] = time.time,
    ) -> None:
        if not secret:
            raise ValueError("token secret must not be empty")
        self._secret = secret
        self._lifetime = lifetime
        self._algorithm = algorithm
        self._clock = clock

    @classmethod
    def from_settings(cls, settings: Settings) -> TokenService:
        return cls(
            settings.jwt_secret.get_secret_value(),
            lifetime=timedelta(minutes=settings.access_token_expire_minutes),
            algorithm=settings.jwt_algorithm,
        )

    def issue(self, identity: Identity) -> str:
        expires_at = math.floor(self._clock()) + int(self._lifetime.total_seconds())
        claims = {"id": identity.id, "name": identity.name, "exp": expires_at}
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> TokenClaims:
        # Expiry is checked against the injected clock below, not jose's own.
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False},
            )
            claims = TokenClaims.model_validate(payload)
        except (JWTError, ValidationError) as exc:
            raise InvalidToken("Invalid or malformed token") from exc

        if claims.exp <= self._clock():
            raise InvalidToken("Token has expired")
        return claims
