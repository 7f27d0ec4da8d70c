"""Pydantic settings for Pulse Curve configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Token precision
    token_decimals: int = Field(default=18, ge=0, le=36, description="Decimals of the payment token (STRK)")

    # Curve sampling
    curve_steps: int = Field(default=120, ge=1, le=10_000, description="Segments sampled per curve")
    curve_u_max_default: float = Field(
        default=10.0, gt=0, description="Minimum curve window in half-lives"
    )
    degenerate_window_sec: float = Field(
        default=600.0, gt=0, description="Curve window in seconds when no premium rate is defined"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
