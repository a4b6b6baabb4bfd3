"""Structured logging for the event emitter.

The emitter only logs at debug level through structlog, on top of stdlib
logging, so the host application keeps control of levels and handlers.
configure_logging() is a convenience for scripts and tests that want to
see dispatch traces.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TextIO

import structlog


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route eventemitter logs to a stream.

    Args:
        level: Log level for the root logger
        json_output: One JSON object per line instead of console output
        stream: Destination (stderr by default); colors only on a tty
    """
    stream = stream or sys.stderr
    logging.basicConfig(
        format="%(message)s",
        stream=stream,
        level=getattr(logging, level.upper()),
        force=True,
    )

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=stream.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def configure_from_env() -> None:
    """Configure logging from EVENT_EMITTER_LOG_LEVEL and EVENT_EMITTER_LOG_JSON."""
    configure_logging(
        level=os.environ.get("EVENT_EMITTER_LOG_LEVEL", "INFO"),
        json_output=os.environ.get("EVENT_EMITTER_LOG_JSON") in ("1", "true", "True"),
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (typically get_logger(__name__))."""
    return structlog.get_logger(name)
