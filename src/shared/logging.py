"""
Logging configuration.

Standard logging with structlog processors on top. Development renders to
the console, production renders one JSON object per line.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import Processor

from .settings import LoggingSettings


def configure_logging(
    level: Optional[str] = None,
    environment: Optional[str] = None,
) -> None:
    """
    Configure stdlib logging and structlog.

    Should be called once at application startup. Arguments override the
    LOG_LEVEL / ENVIRONMENT environment variables.
    """
    settings = LoggingSettings()
    log_level = (level or settings.level).upper()
    env_value = (environment or settings.environment).lower()

    numeric_level = getattr(logging, log_level, logging.INFO)

    timestamper = structlog.processors.TimeStamper(fmt="iso", utc=True)
    renderer: Processor
    if env_value == "production":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=renderer,
        foreign_pre_chain=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            timestamper,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger for the given module name."""
    return structlog.get_logger(name)
