"""Structured logging setup.

Library modules log through the standard ``logging`` module. configure_logging()
routes those records through structlog so a CLI run renders them, and any
structlog events, as console lines or JSON.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any

import structlog

from bacmap.config import get_config

LOG_FILE = Path("logs/bacmap.log")

_HANDLER_NAME = "bacmap"


def _shared_processors() -> list[Any]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def build_handlers(json_logs: bool) -> list[logging.Handler]:
    """stderr handler, plus a file handler when ``logs/`` exists."""
    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=_shared_processors(),
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
    )

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if LOG_FILE.parent.exists():
        handlers.append(logging.FileHandler(LOG_FILE))

    for handler in handlers:
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(formatter)
    return handlers


def configure_logging(level: str | None = None, json_logs: bool | None = None) -> None:
    """Configure structured logging for the application.

    Safe to call repeatedly: handlers installed by an earlier call are
    replaced, other root handlers are left alone.

    Args:
        level: Level name (default: LOG_LEVEL)
        json_logs: Render JSON lines instead of console output (default: JSON_LOGS)
    """
    config = get_config()
    level = (level or config.log_level).upper()
    if json_logs is None:
        json_logs = config.json_logs

    structlog.configure(
        processors=_shared_processors() + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    for handler in list(root.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root.removeHandler(handler)
            handler.close()
    for handler in build_handlers(json_logs):
        root.addHandler(handler)
    root.setLevel(level)
