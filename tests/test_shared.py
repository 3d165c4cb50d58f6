"""Tests for settings and logging configuration."""

import logging

import pytest
import structlog
from pydantic import ValidationError

from src.shared import ForecastSettings, LoggingSettings, configure_logging


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers = handlers
    root.setLevel(level)


class TestForecastSettings:
    """Tests for forecast settings."""

    def test_defaults(self, monkeypatch):
        for name in ("MIN_HORIZON_HOURS", "MAX_HORIZON_HOURS", "SEED"):
            monkeypatch.delenv(f"YARD_FORECAST_{name}", raising=False)
        settings = ForecastSettings()

        assert settings.min_horizon_hours == 1
        assert settings.max_horizon_hours == 72
        assert settings.min_snapshots_for_training == 24
        assert settings.read_timeout_seconds is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("YARD_FORECAST_MIN_SNAPSHOTS_FOR_TRAINING", "48")
        monkeypatch.setenv("YARD_FORECAST_SEED", "11")

        settings = ForecastSettings()

        assert settings.min_snapshots_for_training == 48
        assert settings.seed == 11

    def test_rejects_non_positive_timeout(self):
        with pytest.raises(ValidationError):
            ForecastSettings(read_timeout_seconds=0)


class TestLogging:
    """Tests for logging configuration."""

    def test_level_from_environment(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert LoggingSettings().level == "DEBUG"

    def test_configure_sets_root_level(self, restore_logging):
        configure_logging(level="WARNING", environment="production")

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(
            root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter
        )
