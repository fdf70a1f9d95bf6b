"""structlog setup for the nearby-eats service."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from .settings import settings

SERVICE_NAME = "nearby-eats"
SERVICE_VERSION = "0.1.0"

# chatty below WARNING: httpx logs one line per provider call
QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


def service_context(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("service", SERVICE_NAME)
    event_dict.setdefault("environment", settings.SENTRY_ENVIRONMENT)
    event_dict.setdefault("version", SERVICE_VERSION)
    return event_dict


def drop_color_message_key(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
    # uvicorn duplicates the message with ANSI codes under this key
    event_dict.pop("color_message", None)
    return event_dict


def build_processors(json_logs: bool) -> list[Processor]:
    """
    Processor chain for either output mode.

    The request id is not added here: ``RequestIDMiddleware`` binds it with
    ``structlog.contextvars`` and ``merge_contextvars`` picks it up.
    """
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        service_context,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
    ]
    if json_logs:
        chain += [
            structlog.processors.format_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.UnicodeDecoder(),
            drop_color_message_key,
            structlog.processors.JSONRenderer(),
        ]
    else:
        chain += [
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            structlog.dev.ConsoleRenderer(),
        ]
    return chain


def configure_structlog(json_logs: bool = False) -> None:
    """
    Configure structlog and the stdlib root logger.

    JSON output is used when ``json_logs`` is set or DEBUG is off. The level
    comes from ``LOG_LEVEL``.
    """
    level = logging.getLevelName(settings.LOG_LEVEL.upper())
    if not isinstance(level, int):
        level = logging.INFO

    structlog.configure(
        processors=build_processors(json_logs or not settings.DEBUG),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


__all__ = ["SERVICE_VERSION", "build_processors", "configure_structlog", "get_logger"]
