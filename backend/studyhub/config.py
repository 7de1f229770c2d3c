"""Application configuration using Pydantic Settings."""

import json
from enum import Enum
from functools import lru_cache
from typing import Annotated

from pydantic import AliasChoices, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from studyhub.exceptions import ConfigurationError


class AuthMode(str, Enum):
    """How incoming requests are authenticated."""

    JWT = "jwt"
    BYPASS = "bypass"  # Development only: every request gets a placeholder identity


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "StudyHub"
    # Free-form (e.g. "staging"); only "production" and "development" change behavior
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "node_env"),
    )
    port: int = 5000
    log_level: str = "INFO"

    @field_validator("environment", mode="before")
    @classmethod
    def normalize_environment(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().lower() or "development"
        return value

    # Database
    # Falls back to a local SQLite file outside production
    database_url_override: str | None = Field(
        default=None,
        validation_alias=AliasChoices("database_url", "database_url_override"),
    )

    @computed_field
    @property
    def database_url(self) -> str:
        """Get async database URL, rewriting plain Postgres schemes for asyncpg."""
        url = self.database_url_override
        if not url:
            return "sqlite+aiosqlite:///./studyhub.db"
        if url.startswith("postgresql://"):
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        elif url.startswith("postgres://"):
            url = url.replace("postgres://", "postgresql+asyncpg://", 1)
        # asyncpg doesn't accept libpq query params via URL
        if url.startswith("postgresql+asyncpg://") and "?" in url:
            url = url.split("?")[0]
        return url

    # Auth / JWT
    jwt_secret: str | None = None
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60 * 24 * 7  # 7 days
    disable_auth: bool = False

    @property
    def auth_mode(self) -> AuthMode:
        return AuthMode.BYPASS if self.disable_auth else AuthMode.JWT

    # CORS
    allowed_origins: Annotated[list[str], NoDecode] = ["http://localhost:3000"]

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def split_origins(cls, value: object) -> object:
        """Accept a JSON list or a comma-separated string."""
        if isinstance(value, str):
            value = value.strip()
            if value.startswith("["):
                return json.loads(value)
            return [origin.strip() for origin in value.split(",") if origin.strip()]
        return value

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def validate_required(self) -> None:
        """
        Fail fast on configuration that must not reach a production server.

        Raises ConfigurationError listing every problem found.
        """
        if not self.is_production:
            return

        problems = []
        if not self.jwt_secret:
            problems.append("JWT_SECRET is required in production")
        if not self.database_url_override:
            problems.append("DATABASE_URL is required in production")
        if self.auth_mode is AuthMode.BYPASS:
            problems.append("DISABLE_AUTH must not be enabled in production")
        if problems:
            raise ConfigurationError("; ".join(problems))


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def sanitize_error(error: Exception, *, generic_message: str = "Internal Server Error") -> str:
    """
    Return a user-safe error message.

    In development, returns the full exception string for debugging.
    Elsewhere, returns a generic message to avoid leaking internals.
    """
    settings = get_settings()
    if settings.environment == "development":
        return str(error) or generic_message
    return generic_message
