"""
structlog setup.

Development gets coloured console lines, every other environment gets one
JSON object per event. Money is passed to loggers as ``Decimal`` and leaves
as a plain string, so ``1062.00`` is never rendered as ``Decimal('1062.00')``.
"""

import logging
import sys
from decimal import Decimal

import structlog
from structlog.types import EventDict, Processor

from solarbooks.config.settings import get_settings

# Third-party loggers that only add noise at INFO
QUIET_LOGGERS = ("aiosqlite", "fontTools", "fpdf", "uvicorn.access")


def add_app_context(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    settings = get_settings()
    event_dict["app"] = settings.app_name
    event_dict["version"] = settings.app_version
    event_dict["environment"] = settings.environment
    return event_dict


def stringify_money(
    logger: logging.Logger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Render Decimal values (amounts, quantities, balances) as strings."""
    for key, value in event_dict.items():
        if isinstance(value, Decimal):
            event_dict[key] = str(value)
    return event_dict


def _renderer(environment: str) -> list[Processor]:
    if environment == "development":
        return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]
    return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]


def configure_logging(level: str | None = None) -> None:
    """Configure structlog and the stdlib root logger it writes through."""
    settings = get_settings()

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_app_context,
        stringify_money,
        *_renderer(settings.environment),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, level or settings.log_level),
    )
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
