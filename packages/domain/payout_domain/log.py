"""Structured logging setup"""
import logging
import sys
from typing import Optional

import structlog

from .config import get_settings


def configure_logging(level: Optional[str] = None, json: Optional[bool] = None) -> None:
    """Configure structlog on top of the stdlib logging module.

    Args:
        level: Log level name, defaults to settings.log_level
        json: Render JSON lines instead of console output, defaults to settings.log_json
    """
    settings = get_settings()
    level = (level or settings.log_level).upper()
    json = settings.log_json if json is None else json

    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger("payout_domain").setLevel(level)

    renderer = structlog.processors.JSONRenderer() if json else structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
