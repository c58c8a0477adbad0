"""
Async Utilities for provider fan-out.

Python 3.12+ features used:
- asyncio.TaskGroup for structured concurrency (3.11+)
- asyncio.timeout context manager (3.11+)
- Type parameter syntax for generic functions

Provides:
- Parallel execution with TaskGroup, preserving input order
- Optional per-call timeout
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable
from typing import TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Parallel Execution with TaskGroup
# =============================================================================


async def gather_with_errors(
    *coros: Awaitable[T],
    return_exceptions: bool = False,
) -> list[T | Exception]:
    """
    Execute coroutines in parallel using TaskGroup.

    Results are returned in the order the coroutines were passed, regardless
    of completion order.

    Args:
        *coros: Coroutines to execute
        return_exceptions: If True, return exceptions in place of results
            instead of cancelling the siblings and raising

    Returns:
        List of results (or exceptions if return_exceptions=True)

    Example:
        experts, trials = await gather_with_errors(
            expert_provider.fetch(query),
            trial_provider.fetch(query),
            return_exceptions=True,
        )
    """
    results: list[T | Exception | None] = [None] * len(coros)

    if return_exceptions:

        async def safe_run(coro: Awaitable[T], index: int) -> None:
            try:
                results[index] = await coro
            except Exception as e:
                results[index] = e

        async with asyncio.TaskGroup() as tg:
            for i, coro in enumerate(coros):
                tg.create_task(safe_run(coro, i))
    else:
        # Fail fast: TaskGroup cancels siblings and raises an ExceptionGroup
        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(coro) for coro in coros]
        results = [task.result() for task in tasks]

    return results  # type: ignore[return-value]


async def with_timeout(coro: Awaitable[T], timeout: float | None) -> T:
    """
    Await a coroutine, bounded by ``timeout`` seconds when one is given.

    Raises:
        TimeoutError: if the deadline passes first
    """
    if timeout is None:
        return await coro
    async with asyncio.timeout(timeout):
        return await coro
