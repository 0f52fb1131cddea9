"""
Core configuration and settings for the Writing Assistant proxy.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Writing Assistant"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 3001
    allowed_origin: str | None = None

    # Provider keys (server side, optional)
    openai_api_key: str | None = None
    anthropic_api_key: str | None = None
    gemini_api_key: str | None = None

    # Upstream calls
    upstream_timeout: float = Field(default=120.0, gt=0)
    anthropic_raw_response: bool = False  # return Anthropic's native body unmodified

    @field_validator("allowed_origin", "openai_api_key", "anthropic_api_key", "gemini_api_key")
    @classmethod
    def blank_to_none(cls, v: str | None) -> str | None:
        """Treat empty environment values as unset."""
        if v is not None and not v.strip():
            return None
        return v

    @property
    def cors_origin(self) -> str:
        return self.allowed_origin or "*"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
