"""
Logging configuration.

Provides a single entry point for configuring structured logging.
Supports environment-based configuration for:
- Log level (DEBUG, INFO, WARNING, ERROR)
- Output format (json, console)

Configuration is read from environment variables when not passed:
- IDK_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: WARNING)
- IDK_LOG_FORMAT: json | console (default: console)

Log output always goes to stderr; stdout is reserved for the report.

Usage:
    from idk_validator.logging import configure_logging, get_logger
    configure_logging(level="DEBUG")

    log = get_logger(__name__)
    log.info("document_extracted", path="dictionary/core/analyze.md", sections=4)
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Any, Literal

import structlog
from structlog.types import Processor

_configured = False


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the validator.

    Should be called once at startup (CLI entry). Subsequent calls are
    no-ops unless force=True.

    Args:
        level: Log level (overrides IDK_LOG_LEVEL env var)
        format: Output format (overrides IDK_LOG_FORMAT env var)
        force: Reconfigure even if already configured
    """
    global _configured

    if _configured and not force:
        return

    log_level = (level or os.environ.get("IDK_LOG_LEVEL", "WARNING")).upper()
    log_format = (format or os.environ.get("IDK_LOG_FORMAT", "console")).lower()
    numeric_level = getattr(logging, log_level, logging.WARNING)

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )
    logging.getLogger("idk_validator").setLevel(numeric_level)

    _configured = True


def _install_defaults() -> None:
    """Route log events through stdlib ``logging`` until configure_logging runs.

    No handlers are added, so an unconfigured process only sees WARNING and
    above, on stderr, through the stdlib last-resort handler.
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    """Get a structured logger (typically ``get_logger(__name__)``).

    Leaves an application's own structlog configuration alone; otherwise the
    package defaults apply until :func:`configure_logging` is called.
    """
    if not _configured and not structlog.is_configured():
        _install_defaults()
    return structlog.get_logger(name)


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured
