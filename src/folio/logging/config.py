"""Logging configuration for Folio components."""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from folio.logging.colors import LEVEL_STYLES

NOISY_LOGGERS = ("uvicorn.access", "uvicorn.error", "httpx", "httpcore", "aiosqlite")


def tag_service(service_name: str) -> Processor:
    """Processor that stamps every event with the emitting component."""

    def add_service(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
        event_dict.setdefault("service", service_name)
        return event_dict

    return add_service


def build_processors(
    *,
    service_name: str = "api",
    colors: bool = False,
    json_output: bool = False,
) -> list[Processor]:
    """Processor chain ending in a JSON or console renderer."""
    if json_output:
        timestamper = structlog.processors.TimeStamper(fmt="iso")
        renderer: Processor = structlog.processors.JSONRenderer()
    else:
        timestamper = structlog.processors.TimeStamper(fmt="%H:%M:%S")
        renderer = structlog.dev.ConsoleRenderer(
            colors=colors,
            level_styles=LEVEL_STYLES if colors else None,
            sort_keys=False,
        )

    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        tag_service(service_name),
        timestamper,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        renderer,
    ]


def configure_logging(
    *,
    service_name: str = "api",
    level: str = "INFO",
    colors: bool | None = None,
    json_output: bool = False,
) -> None:
    """Configure structlog for Folio.

    Call this once at startup, before anything logs.

    Args:
        service_name: Component tag added to every event (api, cli)
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        colors: Enable colors (auto-detect TTY if None)
        json_output: Use JSON output for production/log aggregation
    """
    if colors is None:
        colors = sys.stderr.isatty()

    _configure_stdlib_logging(level)

    structlog.configure(
        processors=build_processors(
            service_name=service_name, colors=colors, json_output=json_output
        ),
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def _configure_stdlib_logging(level: str) -> None:
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[logging.StreamHandler()],
    )
    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
