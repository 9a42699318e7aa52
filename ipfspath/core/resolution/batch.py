"""
Concurrent batch combinator.

Runs one task per item, collects outcomes in input order and keeps each
item's failure isolated from its siblings.
"""
import asyncio
from dataclasses import dataclass
from typing import (
    Any, Awaitable, Callable, Generic, List, Optional, Sequence, TypeVar
)

T = TypeVar('T')
R = TypeVar('R')


@dataclass
class Outcome(Generic[T, R]):
    """Result or error of one item of a batch."""
    index: int
    item: T
    value: Optional[R] = None
    error: Optional[BaseException] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> R:
        """Returns the value or raises the stored error."""
        if self.error is not None:
            raise self.error
        return self.value


def _limiter(limit: Optional[int]) -> Optional[asyncio.Semaphore]:
    if limit is None:
        return None
    if limit < 1:
        raise ValueError(f"limit must be >= 1 or None, got {limit}")
    return asyncio.Semaphore(limit)


async def _run_one(
    index: int,
    item: T,
    worker: Callable[[T], Awaitable[R]],
    semaphore: Optional[asyncio.Semaphore]
) -> Outcome:
    try:
        if semaphore is None:
            value = await worker(item)
        else:
            async with semaphore:
                value = await worker(item)
    except Exception as e:
        return Outcome(index, item, error=e)
    return Outcome(index, item, value=value)


async def _cancel_all(tasks: Sequence[asyncio.Task]) -> None:
    for task in tasks:
        if not task.done():
            task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)


async def gather_outcomes(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    limit: Optional[int] = None
) -> List[Outcome]:
    """
    Run worker over every item concurrently and collect all outcomes.

    A failing item never cancels or delays the others. If the caller is
    cancelled, every in-flight task is cancelled before the cancellation
    propagates.

    Args:
        items: Inputs, in order
        worker: Coroutine function applied to each item
        limit: Maximum number of workers running at once (None: unbounded)

    Returns:
        One Outcome per item, in input order
    """
    semaphore = _limiter(limit)
    tasks = [
        asyncio.ensure_future(_run_one(i, item, worker, semaphore))
        for i, item in enumerate(items)
    ]
    if not tasks:
        return []

    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        await _cancel_all(tasks)
        raise


async def first_failure(
    items: Sequence[T],
    worker: Callable[[T], Awaitable[R]],
    limit: Optional[int] = None
) -> List[Outcome]:
    """
    Run worker over every item and stop at the first failure.

    As soon as any item fails, the remaining tasks are cancelled.

    Returns:
        All outcomes in input order when nothing failed, otherwise a
        single-element list holding the first failure to complete
    """
    semaphore = _limiter(limit)
    tasks = [
        asyncio.ensure_future(_run_one(i, item, worker, semaphore))
        for i, item in enumerate(items)
    ]
    if not tasks:
        return []

    outcomes: List[Any] = [None] * len(tasks)
    try:
        for next_done in asyncio.as_completed(tasks):
            outcome = await next_done
            if not outcome.ok:
                await _cancel_all(tasks)
                return [outcome]
            outcomes[outcome.index] = outcome
    except BaseException:
        await _cancel_all(tasks)
        raise

    return outcomes
