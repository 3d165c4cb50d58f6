"""Cross-cutting configuration and logging."""

from .settings import ForecastSettings, LoggingSettings
from .logging import configure_logging, get_logger

__all__ = [
    "ForecastSettings",
    "LoggingSettings",
    "configure_logging",
    "get_logger",
]
