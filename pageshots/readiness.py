"""
Page readiness for full-page capture.

A page goes through a fixed sequence before it is captured:

1. navigate and wait for the network to go (mostly) idle
2. scroll to the bottom in small steps so lazy content loads, then back up
3. wait for every pending ``<img>`` to load or error, capped per image
4. settle for a moment so animations and paint finish

Each phase is a state of ``PageReadinessController``; any error moves it to
``FAILED`` and is re-raised for the caller to report.
"""

import asyncio
import time
from enum import Enum
from pathlib import Path
from typing import Optional

from pyppeteer.errors import TimeoutError as PyppeteerTimeoutError
from pyppeteer.page import Page

from pageshots.console import debug_console
from pageshots.errors import NavigationTimeout, ReadinessError
from pageshots.models import ReadinessTimings

# scrolls by ``step`` every ``interval`` ms, re-reading the height each tick
# since lazy content can grow the document while we scroll
SCROLL_SCRIPT = """
async (step, interval, settle) => {
    await new Promise((resolve) => {
        let totalHeight = 0;
        const timer = setInterval(() => {
            const scrollHeight = (document.body || document.documentElement).scrollHeight;
            window.scrollBy(0, step);
            totalHeight += step;
            if (totalHeight >= scrollHeight) {
                clearInterval(timer);
                window.scrollTo(0, 0);
                setTimeout(resolve, settle);
            }
        }, interval);
    });
}
"""

IMAGES_SCRIPT = """
async (timeout) => {
    const images = Array.from(document.querySelectorAll('img'));
    await Promise.all(images.map((img) => {
        if (img.complete) return Promise.resolve();
        return new Promise((resolve) => {
            img.addEventListener('load', () => resolve());
            img.addEventListener('error', () => resolve());
            setTimeout(() => resolve(), timeout);
        });
    }));
}
"""


class ReadinessState(str, Enum):
    NAVIGATING = "navigating"
    SCROLLING = "scrolling"
    WAITING_IMAGES = "waiting_images"
    SETTLING = "settling"
    CAPTURED = "captured"
    FAILED = "failed"


TRANSITIONS = {
    None: {ReadinessState.NAVIGATING},
    ReadinessState.NAVIGATING: {ReadinessState.SCROLLING, ReadinessState.FAILED},
    ReadinessState.SCROLLING: {ReadinessState.WAITING_IMAGES, ReadinessState.FAILED},
    ReadinessState.WAITING_IMAGES: {ReadinessState.SETTLING, ReadinessState.FAILED},
    ReadinessState.SETTLING: {ReadinessState.CAPTURED, ReadinessState.FAILED},
    ReadinessState.CAPTURED: set(),
    ReadinessState.FAILED: set(),
}


class PageReadinessController:
    def __init__(
        self,
        page: Page,
        timeout_millis: int,
        timings: Optional[ReadinessTimings] = None,
    ):
        self.page = page
        self.timeout_millis = timeout_millis
        self.timings = timings or ReadinessTimings()
        self.state: Optional[ReadinessState] = None
        self.history: list[ReadinessState] = []
        self.url: Optional[str] = None
        self._entered = time.monotonic()

    def _advance(self, state: ReadinessState) -> None:
        if state not in TRANSITIONS[self.state]:
            raise ReadinessError(
                f"cannot move from {self.state and self.state.value} to {state.value}"
            )
        now = time.monotonic()
        if self.state is not None:
            debug_console.log(
                f"{self.url} {self.state.value} took {now - self._entered:.2f}s",
                markup=False,
            )
        self.state = state
        self.history.append(state)
        self._entered = now

    def _fail(self) -> None:
        if self.state in (ReadinessState.CAPTURED, ReadinessState.FAILED):
            return
        self.state = ReadinessState.FAILED
        self.history.append(ReadinessState.FAILED)

    async def prepare(self, url: str) -> None:
        """Navigate to ``url`` and bring the page to a capturable state.

        Raises:
            NavigationTimeout: If the page is not network idle within the timeout.
        """
        self.url = url
        try:
            self._advance(ReadinessState.NAVIGATING)
            await self._navigate(url)

            self._advance(ReadinessState.SCROLLING)
            await self.page.evaluate(
                SCROLL_SCRIPT,
                self.timings.scroll_step,
                self.timings.scroll_interval_millis,
                self.timings.scroll_settle_millis,
            )

            self._advance(ReadinessState.WAITING_IMAGES)
            await self.page.evaluate(IMAGES_SCRIPT, self.timings.image_timeout_millis)

            self._advance(ReadinessState.SETTLING)
            await asyncio.sleep(self.timings.final_settle_millis / 1000)
        except Exception:
            self._fail()
            raise

    async def _navigate(self, url: str) -> None:
        try:
            await self.page.goto(
                url, {"waitUntil": "networkidle2", "timeout": self.timeout_millis}
            )
        except PyppeteerTimeoutError as e:
            raise NavigationTimeout(url, self.timeout_millis) from e

    async def capture(self, path: Path) -> Path:
        """Take the full-page screenshot, only valid once the page has settled."""
        try:
            if self.state is not ReadinessState.SETTLING:
                raise ReadinessError(
                    f"page is not ready for capture (state: {self.state and self.state.value})"
                )
            await self.page.screenshot({"path": str(path), "fullPage": True})
            self._advance(ReadinessState.CAPTURED)
        except Exception:
            self._fail()
            raise
        return path
