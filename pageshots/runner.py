from functools import partial
from typing import Sequence

from pageshots.console import console
from pageshots.models import BatchRunConfiguration, CaptureResult, ViewportSize
from pageshots.scheduler import run_batches
from pageshots.tasks import expand_tasks
from pageshots.worker import capture_task


async def run(
    urls: Sequence[str],
    sizes: Sequence[ViewportSize],
    config: BatchRunConfiguration,
) -> list[CaptureResult]:
    """Capture every url at every size, ``config.concurrency`` browsers at a time.

    Raises:
        NoUrlsError: If ``urls`` is empty, before any browser is launched.
    """
    tasks = expand_tasks(urls, sizes)
    console.print(
        f"Processing {len(urls)} URLs in {len(sizes)} sizes "
        f"({len(tasks)} total screenshots) with concurrency: {config.concurrency}"
    )
    worker = partial(capture_task, config=config, total_tasks=len(tasks))
    return await run_batches(
        tasks, config.concurrency, worker, stagger_millis=config.stagger_millis
    )
