"""Application configuration and settings management."""
from functools import lru_cache
from typing import Annotated, List

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Process-wide settings loaded once from environment variables or .env."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    app_name: str = "Stopwatch Game API"

    # Secrets, both mandatory
    pepper: SecretStr
    jwt_secret: SecretStr

    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"

    # Database
    database_url: str = "sqlite+aiosqlite:///./stopwatch.db"

    # Security
    access_token_expire_minutes: int = 60
    jwt_algorithm: str = "HS256"
    allowed_origins: Annotated[List[str], NoDecode] = ["*"]

    @field_validator("pepper", "jwt_secret")
    @classmethod
    def _require_secret(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("must not be empty")
        return value

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: List[str] | str) -> List[str]:
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        return value


@lru_cache
def get_settings() -> Settings:
    """Return memoized settings instance."""

    return Settings()
