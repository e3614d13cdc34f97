"""Structured logging for the audit harness.

Logs go to stderr; stdout is reserved for the rendered report. Loggers wrap
the standard library, so library use without ``configure_logging`` follows
whatever ``logging`` setup the host application has (silent below WARNING by
default).
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.stdlib import LoggerFactory, add_logger_name


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.wrap_logger(logging.getLogger(name))


def configure_logging(log_level: str = "WARNING", log_format: str = "console") -> None:
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, log_level.upper()),
        force=True,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_logger_name,
    ]
    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=LoggerFactory(),
        cache_logger_on_first_use=False,
    )
