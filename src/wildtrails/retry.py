# Copyright (c) 2025-2026 provide.io llc
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Retry with exponential backoff for flaky remote calls (Overpass, LLM providers)."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import TypeVar

import structlog

from wildtrails.logging import get_logger

T = TypeVar("T")


async def retry_with_backoff(
    func: Callable[[], Awaitable[T]],
    *,
    retryable: tuple[type[Exception], ...],
    operation: str,
    max_retries: int = 2,
    initial_delay: float = 1.0,
    backoff_multiplier: float = 2.0,
    logger: structlog.BoundLogger | None = None,
) -> T:
    """Call *func* until it succeeds or *max_retries* extra attempts are spent.

    Only exceptions in *retryable* are retried; anything else propagates
    from the attempt that raised it.

    Args:
        func: Zero-argument coroutine function making one attempt
        retryable: Exception types worth another attempt
        operation: Name used in log events
        max_retries: Attempts after the first call
        initial_delay: Seconds before the first retry
        backoff_multiplier: Factor applied to the delay after each retry

    Raises:
        The last retryable exception once attempts are exhausted
    """
    log = (logger or get_logger(__name__)).bind(operation=operation)
    delay = initial_delay

    for attempt in range(max_retries + 1):
        try:
            return await func()
        except retryable as e:
            if attempt >= max_retries:
                log.warning("retry_exhausted", attempts=attempt + 1, error=str(e))
                raise
            log.info("retry_scheduled", attempt=attempt + 1, max_retries=max_retries, delay=delay, error=str(e))
            await asyncio.sleep(delay)
            delay *= backoff_multiplier

    raise AssertionError("unreachable")
