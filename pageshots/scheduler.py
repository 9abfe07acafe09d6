import asyncio
from typing import Awaitable, Callable, Sequence

from pageshots.console import debug_console
from pageshots.models import CaptureResult, CaptureTask

Worker = Callable[[CaptureTask], Awaitable[CaptureResult]]


def partition(tasks: Sequence[CaptureTask], concurrency: int) -> list[list[CaptureTask]]:
    """Split tasks into consecutive batches of at most ``concurrency`` items."""
    if concurrency < 1:
        raise ValueError(f"concurrency must be at least 1, got {concurrency}")
    return [
        list(tasks[start : start + concurrency])
        for start in range(0, len(tasks), concurrency)
    ]


def start_offset(position: int, stagger_millis: int = 1000) -> float:
    """Seconds the task at ``position`` within its batch waits before starting."""
    return position * stagger_millis / 1000


async def _staggered(worker: Worker, task: CaptureTask, delay: float) -> CaptureResult:
    if delay > 0:
        await asyncio.sleep(delay)
    return await worker(task)


async def run_batches(
    tasks: Sequence[CaptureTask],
    concurrency: int,
    worker: Worker,
    stagger_millis: int = 1000,
) -> list[CaptureResult]:
    """Run tasks batch by batch, each batch concurrently with staggered starts.

    A batch only starts once every task of the previous one has a result.
    Results come back in the same order as ``tasks``.
    """
    batches = partition(tasks, concurrency)
    results: list[CaptureResult] = []
    for number, batch in enumerate(batches, start=1):
        debug_console.log(f"batch {number}/{len(batches)}: {len(batch)} tasks")
        results.extend(
            await asyncio.gather(
                *[
                    _staggered(worker, task, start_offset(position, stagger_millis))
                    for position, task in enumerate(batch)
                ]
            )
        )
    return results
