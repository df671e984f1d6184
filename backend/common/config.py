"""Application configuration via environment variables.

Uses pydantic-settings to load from .env file and environment variables.
All config is centralized here — modules should import `get_settings()`.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ─── Database ───
    database_url: str = "sqlite+aiosqlite:///./jackpot.db"
    db_pool_size: int = 10  # ignored for SQLite
    db_max_overflow: int = 20  # ignored for SQLite

    # ─── App ───
    environment: str = "development"
    log_level: str = "INFO"
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://127.0.0.1:3000",
        "http://localhost:5173",  # Vite dev server
    ]

    # ─── Jackpot Defaults ───
    seed_default_jackpot: bool = True
    default_jackpot_amount: str = "KSH 15M"
    default_draw_days_ahead: int = 2
    new_jackpot_amount: str = "KSH 100,000,000"
    new_jackpot_draw_days_ahead: int = 7


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings singleton.

    Uses lru_cache so Settings is only instantiated once.
    In tests, call `get_settings.cache_clear()` to reset.
    """
    return Settings()
