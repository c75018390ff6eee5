"""Structured logging setup."""

import logging
from typing import Optional

import structlog

from .config import Settings, settings as default_settings


def configure_logging(settings: Optional[Settings] = None) -> None:
    """
    Configure structlog on top of the standard library logger.

    Args:
        settings: Settings to read log_level and log_format from.
            Defaults to the module-level settings singleton.
    """
    settings = settings or default_settings
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", level=level)
    logging.getLogger().setLevel(level)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
    ]
    if settings.log_format == "json":
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
