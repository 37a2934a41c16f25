"""Structured logging for the order webhook: structlog over stdlib handlers.

Every record goes to the console (colored when attached to a terminal) and to a JSONL
file under LOG_DIR. Per-delivery fields (topic, shop domain, order id) are carried in
structlog contextvars through ``delivery_context`` so that repository and mailer log
lines emitted deep in the pipeline still name the order they belong to.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator

import structlog

from drop_orders.config import LOG_FILE, LOG_LEVEL, VERBOSE_LOGGING

BoundLogger = structlog.stdlib.BoundLogger

# SQL echo and HTTP client request lines at INFO drown out the order trail
QUIET_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "uvicorn.access")

_configured = False


def _level_from_env(level_name: str) -> int:
    if level_name.isdigit():
        return int(level_name)
    return getattr(logging, level_name.upper(), logging.INFO)


def _with_renderer(handler: logging.Handler, renderer: Any, level: int, pre_chain: list) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain))
    return handler


def _configure_logging() -> None:
    global _configured
    if _configured:
        return

    level = logging.DEBUG if VERBOSE_LOGGING else _level_from_env(LOG_LEVEL)
    shared = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(level)
    root.addHandler(
        _with_renderer(
            logging.StreamHandler(),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
            level,
            shared,
        )
    )
    root.addHandler(
        _with_renderer(
            logging.FileHandler(LOG_FILE, encoding="utf-8"),
            structlog.processors.JSONRenderer(),
            level,
            shared,
        )
    )
    logging.captureWarnings(True)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            *shared,
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        cache_logger_on_first_use=True,
    )
    _configured = True


def get_logger(name: str = "drop_orders", **bindings: Any) -> BoundLogger:
    """Return a structlog logger for name, configuring logging on first use."""
    _configure_logging()
    logger = structlog.get_logger(name)
    return logger.bind(**bindings) if bindings else logger


@contextmanager
def delivery_context(**context: Any) -> Iterator[None]:
    """Bind delivery fields for every log line emitted inside the block.

    None values are skipped. Previously bound values for the same keys are restored on
    exit, so nested blocks (a delivery, then its order) unwind cleanly.
    """
    fields = {key: value for key, value in context.items() if value is not None}
    with structlog.contextvars.bound_contextvars(**fields):
        yield
