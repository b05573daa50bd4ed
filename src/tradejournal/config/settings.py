"""Application settings using Pydantic."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Default paths
DEFAULT_DATA_DIR = Path.home() / ".tradejournal"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Data/storage settings
    data_dir: Path = Field(default=DEFAULT_DATA_DIR)
    db_path: Path | None = Field(default=None)  # Defaults to data_dir/journal.db
    storage_key: str = Field(default="trading-journal-storage")

    # Calendar settings
    timezone: str = Field(default="UTC")
    week_numbering: Literal["calendar", "iso"] = Field(default="calendar")

    # Logging settings
    log_level: str = Field(default="INFO")
    log_to_file: bool = Field(default=True)
    log_dir: Path | None = Field(default=None)  # Defaults to data_dir/logs
    log_retention_days: int = Field(default=30)

    @field_validator("timezone")
    @classmethod
    def _check_timezone(cls, v: str) -> str:
        # Raises ZoneInfoNotFoundError (a KeyError) for unknown names
        try:
            ZoneInfo(v)
        except (KeyError, ValueError) as e:
            raise ValueError(f"Unknown timezone: {v}") from e
        return v

    @property
    def tzinfo(self) -> ZoneInfo:
        """Get the reference timezone for calendar days."""
        return ZoneInfo(self.timezone)

    @property
    def database_path(self) -> Path:
        """Get the database file path."""
        if self.db_path:
            return self.db_path
        return self.data_dir / "journal.db"

    @property
    def logs_path(self) -> Path:
        """Get the logs directory path."""
        if self.log_dir:
            return self.log_dir
        return self.data_dir / "logs"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> <level>{level: <7}</level> "
    "<cyan>{name}</cyan> {message}"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} {level: <7} {name}:{line} {message}"


def setup_logging(settings: Settings | None = None) -> None:
    """Route journal logs to stderr and, optionally, a daily log file.

    Calling it again replaces the previous sinks, so every CLI invocation
    starts from the same configuration.

    Args:
        settings: Settings to read the level and log directory from.
            Uses ``get_settings()`` if not provided.
    """
    import sys

    from loguru import logger

    settings = settings or get_settings()
    level = settings.log_level.upper()

    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if not settings.log_to_file:
        return

    log_dir = settings.logs_path
    log_dir.mkdir(parents=True, exist_ok=True)
    logger.add(
        log_dir / "journal_{time:YYYY-MM-DD}.log",
        level=level,
        format=FILE_FORMAT,
        rotation="00:00",
        retention=f"{settings.log_retention_days} days",
        compression="gz",
    )
    logger.debug(f"Journal log directory: {log_dir}")
