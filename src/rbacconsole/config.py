"""Application configuration from environment variables."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Console settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="RBAC_CONSOLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Backend
    api_url: str = Field(
        default="http://localhost:5000/api",
        description="Base URL of the RBAC REST service",
    )
    request_timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")

    # Session
    token: str | None = Field(default=None, description="Bearer token, overrides the token file")
    token_file: Path | None = Field(default=None, description="Where the bearer token is persisted")
    login_path: str = Field(default="/login", description="Where to send the user after teardown")

    # Application
    environment: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Environment name",
    )
    log_level: str = Field(default="WARNING", description="Logging level")
    debug: bool = Field(default=False, description="Debug mode")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
