"""Application configuration settings."""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App
    app_name: str = "Pacer"
    debug: bool = False

    # Logging
    log_level: str = "INFO"
    log_dir: str = "logs"
    enable_file_logging: bool = False

    # Playback defaults for new sessions
    default_wpm: int = 300
    default_chunk_size: int = 1

    # Limits
    max_input_chars: int = 10_000_000

    cors_origins: list[str] = ["http://localhost:5173", "http://localhost:3000"]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()
