"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    APP_NAME: str = "Buni Money Tracker"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Deposit ledger
    LEDGER_BACKEND: Literal["memory", "sqlite"] = "memory"
    LEDGER_DB_PATH: str = "deposits.db"

    model_config = SettingsConfigDict(
        env_prefix="BUNI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance."""
    return Settings()
