"""Logging configuration for the timeslider library."""

import logging
from typing import Any

import structlog

# Event keys whose integer values are instants in epoch milliseconds.
INSTANT_KEYS = frozenset({"time", "old_time", "new_time", "origin_time", "continuous_time"})


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a structlog logger."""
    return structlog.get_logger(name)


def render_instants(
    logger: Any, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    """Processor that adds an ISO rendering next to every instant field."""
    from timeslider.calendar import to_iso

    for key in INSTANT_KEYS & event_dict.keys():
        value = event_dict[key]
        if isinstance(value, int) and not isinstance(value, bool):
            event_dict[f"{key}_iso"] = to_iso(value)
    return event_dict


def configure_logging(
    level: str = "WARNING",
    json_output: bool = False,
    iso_instants: bool = True,
) -> None:
    """Configure timeslider logging.

    Args:
        level: Log level ("DEBUG", "INFO", "WARNING", "ERROR")
        json_output: True for JSON output (production), False for console
        iso_instants: Add ``<key>_iso`` renderings of logged instants
    """
    logging.basicConfig(format="%(message)s", level=getattr(logging, level.upper()))

    shared_processors: list[Any] = [
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if iso_instants:
        shared_processors.append(render_instants)

    if json_output:
        processors = shared_processors + [structlog.processors.JSONRenderer()]
    else:
        processors = shared_processors + [structlog.dev.ConsoleRenderer(colors=True)]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
