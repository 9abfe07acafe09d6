from pathlib import Path

import pytest
from pyppeteer.errors import PageError, TimeoutError as PyppeteerTimeoutError

from pageshots.console import debug_console
from pageshots.models import BatchRunConfiguration, ReadinessTimings

INSTANT = ReadinessTimings(
    scroll_step=100,
    scroll_interval_millis=0,
    scroll_settle_millis=0,
    image_timeout_millis=0,
    final_settle_millis=0,
)


class FakePage:
    def __init__(self, browser):
        self.browser = browser
        self.viewport = None
        self.goto_calls = []
        self.evaluated = []
        self.screenshots = []

    async def setViewport(self, viewport):
        self.viewport = viewport

    async def goto(self, url, options=None):
        self.goto_calls.append((url, options))
        if url in self.browser.hanging:
            raise PyppeteerTimeoutError(
                f"Navigation Timeout Exceeded: {options['timeout']} ms exceeded."
            )
        if url in self.browser.broken:
            raise PageError(f"net::ERR_NAME_NOT_RESOLVED at {url}")

    async def evaluate(self, script, *args):
        self.evaluated.append((script, args))
        if self.browser.broken_scripts:
            raise PageError("Evaluation failed: ReferenceError: document is not defined")

    async def screenshot(self, options):
        self.screenshots.append(options)
        if self.browser.screenshot_error:
            raise self.browser.screenshot_error
        Path(options["path"]).write_bytes(b"\x89PNG\r\n\x1a\n")


class FakeBrowser:
    def __init__(
        self,
        hanging=(),
        broken=(),
        broken_scripts=False,
        close_error=None,
        screenshot_error=None,
    ):
        self.close_error = close_error
        self.screenshot_error = screenshot_error
        self.hanging = set(hanging)
        self.broken = set(broken)
        self.broken_scripts = broken_scripts
        self.pages = []
        self.closed = False

    async def newPage(self):
        page = FakePage(self)
        self.pages.append(page)
        return page

    async def close(self):
        self.closed = True
        if self.close_error:
            raise self.close_error


class FakeLauncher:
    """Stands in for ``pyppeteer.launch`` and remembers every browser it made."""

    def __init__(self, **browser_kwargs):
        self.browser_kwargs = browser_kwargs
        self.browsers = []
        self.launch_kwargs = []

    async def __call__(self, **kwargs):
        self.launch_kwargs.append(kwargs)
        browser = FakeBrowser(**self.browser_kwargs)
        self.browsers.append(browser)
        return browser


@pytest.fixture
def fake_launch(monkeypatch):
    def install(**browser_kwargs):
        launcher = FakeLauncher(**browser_kwargs)
        monkeypatch.setattr("pageshots.worker.launch", launcher)
        return launcher

    return install


@pytest.fixture
def run_config(tmp_path) -> BatchRunConfiguration:
    return BatchRunConfiguration(
        output_dir=tmp_path,
        concurrency=8,
        timeout_millis=30000,
        stagger_millis=0,
        readiness=INSTANT,
    )


@pytest.fixture(autouse=True)
def quiet_debug_console():
    yield
    debug_console.quiet = True
