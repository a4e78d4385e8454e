"""Client configuration using pydantic-settings."""
import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Notes API
    api_url: str = Field(default="http://localhost:3000", validation_alias="NOTES_API_URL")
    api_timeout: float = Field(default=30.0, gt=0, validation_alias="NOTES_API_TIMEOUT")

    # Session persistence - the token is stored under a fixed key
    token_key: str = Field(default="token", validation_alias="NOTES_TOKEN_KEY")
    token_file: Path = Field(
        default=Path.home() / ".notes_client" / "session.json",
        validation_alias="NOTES_TOKEN_FILE",
    )

    log_level: str = Field(default="WARNING", validation_alias="NOTES_LOG_LEVEL")

    @field_validator("api_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended directly."""
        return v.rstrip("/")

    @field_validator("token_key")
    @classmethod
    def check_token_key_not_empty(cls, v: str) -> str:
        """Validate the storage key is not empty."""
        if not v.strip():
            raise ValueError("Token key cannot be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Upper-case the log level and reject unknown names."""
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: '{v}'")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str | None = None) -> None:
    """
    Configure root logging for applications embedding the client.

    Args:
        level: Log level name. Defaults to the configured NOTES_LOG_LEVEL.
    """
    logging.basicConfig(
        level=level or get_settings().log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
