"""Configuration management for Typeahead."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="TYPEAHEAD_",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Autocomplete Service
    # ==========================================================================
    api_base_url: str = Field(
        default="https://be-v2.convose.com",
        description="Autocomplete service base URL",
    )
    autocomplete_path: str = Field(
        default="/autocomplete/interests",
        description="Path of the autocomplete endpoint",
    )
    api_token: Optional[str] = Field(
        default=None,
        description="Value sent in the Authorization header",
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Request timeout in seconds",
    )

    # ==========================================================================
    # Search Behaviour
    # ==========================================================================
    page_size: int = Field(
        default=8,
        ge=1,
        le=100,
        description="Suggestions requested per page",
    )
    debounce_ms: int = Field(
        default=300,
        ge=0,
        le=5000,
        description="Quiet period before a changed term is evaluated",
    )

    # ==========================================================================
    # Logging
    # ==========================================================================
    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(
        default=None,
        description="Write TUI logs to this file instead of the Textual console",
    )

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000

    @field_validator("log_level", mode="after")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Invalid log level. Must be one of: {valid_levels}")
        return v

    def has_token(self) -> bool:
        """Check if an API token is configured."""
        return bool(self.api_token)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def reload_settings() -> Settings:
    """Reload settings (useful after env changes)."""
    get_settings.cache_clear()
    return get_settings()
