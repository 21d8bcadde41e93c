"""Exponential backoff retry for byte-window reads over HTTP."""

from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable
from typing import TypeVar

logger = logging.getLogger("magicsniff.retry")

T = TypeVar("T")


async def retry_async(
    func: Callable[..., Awaitable[T]],
    *args: object,
    max_retries: int = 2,
    base_delay: float = 0.25,
    max_delay: float = 5.0,
    jitter: bool = True,
    retryable_exceptions: tuple[type[Exception], ...] = (Exception,),
    **kwargs: object,
) -> T:
    """Await ``func`` and retry it with exponential backoff on failure.

    Args:
        func: Async function to retry.
        max_retries: Retries after the first attempt; 0 disables retrying.
        base_delay: Delay before the first retry, in seconds.
        max_delay: Upper bound for any single delay.
        jitter: Scale each delay by a random factor in [0.5, 1.0).
        retryable_exceptions: Exception types that trigger a retry. Anything
            else propagates immediately.

    Returns:
        The function's return value on success.

    Raises:
        The last exception once retries are exhausted.
    """
    attempt = 0
    while True:
        try:
            return await func(*args, **kwargs)
        except retryable_exceptions as e:
            if attempt >= max_retries:
                if max_retries:
                    logger.warning(
                        "All %d retries exhausted for %s: %s",
                        max_retries,
                        func.__name__,
                        e,
                    )
                raise

            delay = min(base_delay * (2**attempt), max_delay)
            if jitter:
                delay = delay * (0.5 + random.random() * 0.5)  # noqa: S311

            attempt += 1
            logger.info(
                "Retry %d/%d for %s after %.2fs: %s",
                attempt,
                max_retries,
                func.__name__,
                delay,
                e,
            )
            await asyncio.sleep(delay)
