# backend/app/core/config.py
import logging
import os
from pathlib import Path
from typing import Any, Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import BRAND_NAME


def is_running_tests() -> bool:
    """
    Detect if code is running under pytest.

    PYTEST_CURRENT_TEST is set automatically by pytest during test runs, and is
    not expected to be present in production environments.
    """
    return os.getenv("PYTEST_CURRENT_TEST") is not None


_BACKEND_ROOT = Path(__file__).resolve().parents[2]

logger = logging.getLogger(__name__)

# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = _BACKEND_ROOT / ".env"
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


class Settings(BaseSettings):
    """Application settings loaded from environment variables and backend/.env."""

    model_config = SettingsConfigDict(
        env_file=str(_BACKEND_ROOT / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = BRAND_NAME
    environment: Literal["local", "development", "test", "staging", "production"] = "local"
    is_testing: bool = Field(default_factory=is_running_tests)
    log_level: str = "INFO"

    database_url: str = Field(
        default=f"sqlite:///{_BACKEND_ROOT / 'cadence.db'}",
        description="SQLAlchemy URL for the availability store",
    )
    database_echo: bool = False

    # Timezone applied when an instructor has none (or an unknown one) on file
    default_timezone: str = "America/New_York"

    # Weekly editor grid; all values are minutes since midnight unless noted
    availability_grid_start_minutes: int = 6 * 60
    availability_grid_end_minutes: int = 22 * 60
    availability_snap_minutes: int = 15
    availability_hour_height_px: float = 48.0
    availability_min_block_minutes: int = 15
    availability_max_blocks_per_day: int = 5

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        level = (v or "INFO").strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unsupported log level: {v}")
        return level

    @field_validator("availability_snap_minutes", "availability_min_block_minutes")
    @classmethod
    def _positive_minutes(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Minute settings must be positive")
        return v

    @field_validator("availability_max_blocks_per_day")
    @classmethod
    def _positive_block_limit(cls, v: int) -> int:
        if v < 1:
            raise ValueError("At least one block per day must be allowed")
        return v

    @field_validator("availability_hour_height_px")
    @classmethod
    def _positive_height(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("Hour height must be positive")
        return v

    @model_validator(mode="after")
    def _validate_grid_range(self) -> "Settings":
        start = self.availability_grid_start_minutes
        end = self.availability_grid_end_minutes
        if not 0 <= start < end < 24 * 60:
            raise ValueError(
                f"Availability grid must satisfy 0 <= start < end < 1440 (got {start}-{end})"
            )
        if end - start < self.availability_min_block_minutes:
            raise ValueError("Availability grid is shorter than the minimum block duration")
        return self

    def get_database_url(self) -> str:
        """Return the database URL, preferring TEST_DATABASE_URL under pytest."""
        if self.is_testing:
            test_url = os.getenv("TEST_DATABASE_URL")
            if test_url:
                return test_url
        return self.database_url

    @property
    def is_sqlite(self) -> bool:
        return self.get_database_url().startswith("sqlite")

    def grid_kwargs(self) -> dict[str, Any]:
        """Keyword arguments for building the editor grid from settings."""
        return {
            "start_minutes": self.availability_grid_start_minutes,
            "end_minutes": self.availability_grid_end_minutes,
            "quantum_minutes": self.availability_snap_minutes,
            "hour_height_px": self.availability_hour_height_px,
        }


settings = Settings()
