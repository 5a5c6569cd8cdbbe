"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    bot_token: str | None = None  # Only needed to run the Telegram bot

    debug: bool = False

    # Battle Configuration
    strict_moves: bool = False  # Reject unaffordable moves instead of falling back to a light attack
    hero_level: int = 3  # Level the player's character is scaled to
    default_encounter: str = "training-drone"
    combat_trace: bool = False  # Record a CombatLogger trace for every battle


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
