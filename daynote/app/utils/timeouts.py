from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


async def retry_async(
    func: Callable[[], Awaitable[T]],
    attempts: int,
    delay: float,
    *,
    retry_on: tuple[type[BaseException], ...] = (Exception,),
) -> T:
    """Await ``func`` up to ``attempts`` times with a linearly growing pause.

    Only exceptions listed in ``retry_on`` trigger another attempt; anything
    else propagates at once. The last retryable error is re-raised.
    """

    attempts = max(attempts, 1)
    for attempt in range(1, attempts + 1):
        try:
            return await func()
        except retry_on as exc:
            if attempt == attempts:
                raise
            logger.warning(
                "attempt %s/%s failed: %s",
                attempt,
                attempts,
                exc,
            )
            await asyncio.sleep(delay * attempt)
    raise AssertionError("unreachable")  # pragma: no cover


__all__ = ["retry_async"]
