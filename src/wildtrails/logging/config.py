# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Centralized logging configuration for wildtrails.

All output goes to stderr so the CLI can print trails and summaries as JSON
on stdout. Two renderers are available:

- ``console``: coloured key/value lines for a terminal
- ``json``: one JSON object per event for the generation job runner
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from wildtrails.settings import Settings

__all__ = ["get_logger", "configure_logging"]


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog once per process (job runner, HTTP handler or CLI).

    Args:
        settings: Settings instance (will be created if None)
    """
    if settings is None:
        from wildtrails.settings import Settings

        settings = Settings()

    log_level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    if settings.log_format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def get_logger(name: str | None = None) -> structlog.BoundLogger:
    """Logger for *name* (normally the calling module's ``__name__``)."""
    return structlog.get_logger(name)
