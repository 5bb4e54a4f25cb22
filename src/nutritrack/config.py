"""Engine configuration loaded from environment variables."""
import os
from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Engine settings loaded from environment (prefix ``NUTRITRACK_``)."""

    model_config = SettingsConfigDict(
        env_prefix="NUTRITRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Storage
    data_path: str = os.getenv(
        "DATA_PATH",
        os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))),
    )
    store_backend: Literal["sqlite", "file", "memory"] = "sqlite"

    # Calendar-day grouping zone
    timezone: str = "UTC"

    # Seed demo meals/workouts when nothing is persisted yet
    seed_demo_data: bool = True

    # Used by the dashboard when no profile exists
    default_calorie_goal: int = 2000

    @property
    def sqlite_path(self) -> str:
        return os.path.join(self.data_path, "nutritrack.db")

    @property
    def file_store_dir(self) -> str:
        return os.path.join(self.data_path, "nutritrack_data")


@lru_cache
def get_settings() -> Settings:
    return Settings()
