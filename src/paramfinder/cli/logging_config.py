"""
Logging configuration for the paramfinder CLI.

By default structlog is configured to show only warnings and errors;
verbose mode shows everything with console formatting.
"""

from __future__ import annotations

import logging
import sys

import structlog

_quiet_mode: bool = False


def configure_logging(verbose: bool = False, level: str | None = None) -> None:
    """
    Configure logging for CLI usage.

    Args:
        verbose: If True, show all debug/info logs. If False, show only warnings/errors.
        level: Explicit level name overriding the verbosity default.
    """
    if level is not None:
        log_level = getattr(logging, level.upper())
    else:
        log_level = logging.DEBUG if verbose else logging.WARNING

    global _quiet_mode
    _quiet_mode = log_level >= logging.WARNING

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("paramfinder").setLevel(log_level)

    # Silence noisy third-party loggers
    for logger_name in ["httpx", "httpcore", "asyncio"]:
        logging.getLogger(logger_name).setLevel(logging.ERROR)

    if not _quiet_mode:
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.stdlib.PositionalArgumentsFormatter(),
                structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.UnicodeDecoder(),
                structlog.dev.ConsoleRenderer(colors=True),
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )
    else:
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_log_level,
                structlog.processors.UnicodeDecoder(),
                _quiet_renderer,
            ],
            wrapper_class=structlog.stdlib.BoundLogger,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            cache_logger_on_first_use=True,
        )


def _quiet_renderer(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict,
) -> str:
    """Render warnings and errors as a single short line; drop the rest."""
    level = event_dict.pop("level", method_name)
    if level in ("debug", "info"):
        return ""

    event = event_dict.pop("event", "")
    extras = " ".join(f"{k}={v}" for k, v in event_dict.items())
    return f"[{level.upper()}] {event} {extras}".rstrip()


def is_quiet_mode() -> bool:
    """Check if quiet mode is enabled."""
    return _quiet_mode
