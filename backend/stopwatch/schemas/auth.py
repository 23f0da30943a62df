"""Authentication-related schemas."""
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, model_validator
from pydantic_core import PydanticCustomError


class Credentials(BaseModel):
    """Name and password as posted to registration and login."""

    name: str | None = None
    password: str | None = None

    @model_validator(mode="after")
    def _require_both(self) -> Credentials:
        if not self.name or not self.password:
            raise PydanticCustomError("missing_credentials", "Username and password are required.")
        return self


class LoginResponse(BaseModel):
    login_status: Literal["success"] = "success"
    token: str
