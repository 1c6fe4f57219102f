"""Structured logging configuration for the Traveller Campaign Manager.

Log entries are structlog key-value events. Campaign work is scoped with
``campaign_context`` so that every entry emitted while authorizing or
validating a request carries the campaign and user it concerns, without
each call site repeating them.

Example:
    >>> from traveller_manager.core.logging import campaign_context, get_logger
    >>> logger = get_logger(__name__)
    >>> with campaign_context("camp-1", user_id="player-1"):
    ...     logger.info("Task check resolved", difficulty=8, effect=2)
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from structlog.types import Processor


if TYPE_CHECKING:
    from structlog.types import EventDict, WrappedLogger

APP_NAME = "traveller_manager"

SCOPE_KEYS = ("campaign_id", "user_id", "character_id")
"""Context keys that identify what a log entry is about."""


def add_app_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Stamp the application name and tidy campaign scope keys.

    Scope keys passed as None (a shared-map star system has no campaign,
    for instance) are dropped rather than rendered as ``null``.
    """
    event_dict["app"] = APP_NAME
    for key in SCOPE_KEYS:
        if key in event_dict and event_dict[key] is None:
            del event_dict[key]
    return event_dict


def configure_logging(
    *,
    level: str = "INFO",
    json_format: bool = False,
) -> None:
    """Configure application-wide logging.

    Args:
        level: The logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        json_format: If True, output JSON lines instead of console text.

    Example:
        >>> configure_logging(level="DEBUG", json_format=False)
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if json_format:
        processors: list[Processor] = [
            *shared_processors,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = [
            *shared_processors,
            structlog.dev.ConsoleRenderer(
                colors=True,
                exception_formatter=structlog.dev.plain_traceback,
            ),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # sqlite3 and other stdlib output
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        level=log_level,
        stream=sys.stdout,
        force=True,
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Get a configured logger instance.

    Args:
        name: Optional name for the logger (typically __name__).

    Returns:
        A configured structlog BoundLogger instance.
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: Any) -> None:
    """Bind context variables that will be included in all subsequent logs."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()


@contextmanager
def campaign_context(
    campaign_id: str | None = None,
    user_id: str | None = None,
    **extra: Any,
) -> Iterator[None]:
    """Scope log entries to a campaign and acting user for one block.

    Only the keys given a value are bound, and the previous context is
    restored on exit, so scopes nest.

    Args:
        campaign_id: Campaign the work concerns.
        user_id: User performing the action.
        **extra: Further scope keys, such as ``character_id``.
    """
    scope = {"campaign_id": campaign_id, "user_id": user_id, **extra}
    with structlog.contextvars.bound_contextvars(
        **{key: value for key, value in scope.items() if value is not None}
    ):
        yield


__all__ = [
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
    "campaign_context",
]
