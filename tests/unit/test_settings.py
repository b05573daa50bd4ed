"""Tests for configuration settings."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch
from zoneinfo import ZoneInfo

import pytest
from pydantic import ValidationError

from loguru import logger

from tradejournal.config.settings import DEFAULT_DATA_DIR, Settings, setup_logging


class TestSettings:
    """Tests for Settings model."""

    def test_default_settings(self) -> None:
        """Test default settings values."""
        # Clear env vars and disable .env file reading
        with patch.dict(os.environ, {}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.data_dir == DEFAULT_DATA_DIR
        assert settings.storage_key == "trading-journal-storage"
        assert settings.timezone == "UTC"
        assert settings.week_numbering == "calendar"
        assert settings.log_level == "INFO"
        assert settings.log_to_file is True

    def test_derived_paths(self) -> None:
        """Test database and log paths default under data_dir."""
        with patch.dict(os.environ, {"DATA_DIR": "/tmp/journal"}, clear=True):
            settings = Settings(_env_file=None)

        assert settings.database_path == Path("/tmp/journal/journal.db")
        assert settings.logs_path == Path("/tmp/journal/logs")

    def test_explicit_paths_override(self) -> None:
        """Test explicit db_path and log_dir win."""
        env = {"DB_PATH": "/data/trades.db", "LOG_DIR": "/var/log/journal"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.database_path == Path("/data/trades.db")
        assert settings.logs_path == Path("/var/log/journal")

    def test_calendar_settings_from_env(self) -> None:
        """Test loading calendar settings from environment."""
        env = {"TIMEZONE": "Europe/London", "WEEK_NUMBERING": "iso"}
        with patch.dict(os.environ, env, clear=True):
            settings = Settings(_env_file=None)

        assert settings.tzinfo == ZoneInfo("Europe/London")
        assert settings.week_numbering == "iso"

    def test_unknown_timezone_rejected(self) -> None:
        """Test invalid timezone names fail fast."""
        with (
            patch.dict(os.environ, {"TIMEZONE": "Mars/Olympus"}, clear=True),
            pytest.raises(ValidationError, match="Unknown timezone"),
        ):
            Settings(_env_file=None)

    def test_unknown_week_numbering_rejected(self) -> None:
        """Test only known week conventions are accepted."""
        with (
            patch.dict(os.environ, {"WEEK_NUMBERING": "fiscal"}, clear=True),
            pytest.raises(ValidationError),
        ):
            Settings(_env_file=None)


class TestSetupLogging:
    """Tests for log sink configuration."""

    def test_writes_daily_file(self, tmp_path: Path) -> None:
        """Test messages reach a journal log file in the configured directory."""
        settings = Settings(_env_file=None, data_dir=tmp_path, log_level="debug")
        try:
            setup_logging(settings)
            logger.info("opened journal")
        finally:
            logger.remove()

        files = list((tmp_path / "logs").glob("journal_*.log"))
        assert len(files) == 1
        assert "opened journal" in files[0].read_text()

    def test_file_sink_disabled(self, tmp_path: Path) -> None:
        """Test no log directory is created when file logging is off."""
        settings = Settings(_env_file=None, data_dir=tmp_path, log_to_file=False)
        try:
            setup_logging(settings)
        finally:
            logger.remove()

        assert not (tmp_path / "logs").exists()
