"""Structured logging configuration using structlog."""

import sys

import structlog
from wavefetch.config import settings

_LEVELS = {"debug": 10, "info": 20, "warning": 30, "warn": 30, "error": 40, "critical": 50}


def _default_component(logger, method_name, event_dict):
    """Events logged without a bound component are attributed to the package."""
    event_dict.setdefault("component", "wavefetch")
    return event_dict


def setup_logging(log_level: str | None = None, log_format: str | None = None) -> None:
    """Configure structlog for Wavefetch.

    `log_level` / `log_format` override WAVEFETCH_LOG_LEVEL / WAVEFETCH_LOG_FORMAT.
    Uses console renderer for development, JSON for production.
    """
    level = (log_level or settings.log_level).lower()
    fmt = (log_format or settings.log_format).lower()

    if fmt == "json":
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            _default_component,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(_LEVELS.get(level, 20)),
        context_class=dict,
        # stderr keeps CLI table output on stdout clean
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )
