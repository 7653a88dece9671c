"""
Application configuration using Pydantic Settings.

Values are read from environment variables prefixed with ``REQBEAM_``
or from a local ``.env`` file.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings for the ReqBeam service."""

    model_config = SettingsConfigDict(
        env_prefix="REQBEAM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: str = Field(
        default="sqlite:///./reqbeam.db",
        description="SQLAlchemy database URL for templates, environments and history.",
    )
    sql_echo: bool = Field(
        default=False,
        description="Log every SQL statement issued by SQLAlchemy.",
    )
    request_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Timeout in seconds for outgoing HTTP requests.",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level: DEBUG, INFO, WARNING, ERROR.",
    )
    cors_origins: list[str] = Field(
        default=["*"],
        description="Origins allowed to call the API from a browser.",
    )

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Normalize log level to uppercase."""
        return v.upper()


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide Settings instance."""
    return Settings()
