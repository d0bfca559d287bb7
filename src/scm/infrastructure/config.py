"""Runtime configuration, read from ``SCM_*`` environment variables and ``.env``."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SCM_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    DATABASE_URL: str = "sqlite:///supply_chain.db"
    DATABASE_ECHO: bool = False

    # Floor under every row's reorder point; drives all low-stock alerts.
    LOW_STOCK_THRESHOLD: int = Field(10, ge=0)
    DEFAULT_REORDER_POINT: int = Field(50, ge=0)
    ORDER_NUMBER_ATTEMPTS: int = Field(3, ge=1)

    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False


@lru_cache
def get_settings() -> Settings:
    return Settings()
