from contextlib import asynccontextmanager
from typing import AsyncIterator

from pyppeteer import launch
from pyppeteer.browser import Browser
from rich.markup import escape

from pageshots.console import console, debug_console, err_console
from pageshots.models import BatchRunConfiguration, CaptureResult, CaptureTask
from pageshots.naming import screenshot_path
from pageshots.readiness import PageReadinessController


def error_message(error: BaseException) -> str:
    return str(error) or error.__class__.__name__


@asynccontextmanager
async def browser_session(config: BatchRunConfiguration) -> AsyncIterator[Browser]:
    """Launch a dedicated headless browser and always close it afterwards."""
    browser = await launch(headless=config.headless, args=list(config.browser_args))
    try:
        yield browser
    finally:
        try:
            await browser.close()
        except Exception as e:
            debug_console.log(f"failed to close browser: {escape(error_message(e))}")


async def capture_task(
    task: CaptureTask, config: BatchRunConfiguration, total_tasks: int
) -> CaptureResult:
    """Capture one task in its own browser; failures become a failed result."""
    try:
        async with browser_session(config) as browser:
            page = await browser.newPage()
            await page.setViewport({"width": task.size.width, "height": task.size.height})

            console.print(f"Capturing: {escape(task.url)} ({task.size.label})")
            controller = PageReadinessController(
                page, config.timeout_millis, config.readiness
            )
            await controller.prepare(task.url)

            path = screenshot_path(config.output_dir, task, total_tasks)
            await controller.capture(path)
    except Exception as e:
        message = error_message(e)
        err_console.print(
            f"[red]✗[/red] Failed to capture {escape(task.url)}: {escape(message)}"
        )
        return CaptureResult.failed(task.url, message)

    console.print(f"[green]✓[/green] Saved: {escape(str(path))}")
    return CaptureResult.succeeded(task.url, path)
