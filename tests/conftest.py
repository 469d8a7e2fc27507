"""
Shared fakes for the Playwright objects driven by PageRenderer.
"""

import io
from contextlib import asynccontextmanager

import pytest
from PIL import Image

from webrender.config import Settings


def make_png(width: int = 4, height: int = 4) -> bytes:
    buf = io.BytesIO()
    Image.new("RGBA", (width, height), (255, 0, 0, 128)).save(buf, format="PNG")
    return buf.getvalue()


class FakePage:
    def __init__(self, fail_on: str | None = None):
        self.calls: list[tuple[str, object, dict]] = []
        self.handlers = {}
        self.fail_on = fail_on

    def on(self, event, handler):
        self.handlers[event] = handler

    def _record(self, name, arg=None, **kwargs):
        self.calls.append((name, arg, kwargs))
        if self.fail_on == name:
            raise RuntimeError(f"{name} exploded")

    async def goto(self, url, **kwargs):
        self._record("goto", url, **kwargs)

    async def set_content(self, html, **kwargs):
        self._record("set_content", html, **kwargs)

    async def pdf(self, **kwargs):
        self._record("pdf", **kwargs)
        return b"%PDF-1.4\n%fake"

    async def content(self):
        self._record("content")
        return "<html><head></head><body>hello</body></html>"

    async def screenshot(self, **kwargs):
        self._record("screenshot", **kwargs)
        return make_png()

    def call_names(self) -> list[str]:
        return [name for name, _, _ in self.calls]

    def call(self, name) -> tuple:
        return next(c for c in self.calls if c[0] == name)


class FakeContext:
    def __init__(self, page):
        self.page = page

    async def new_page(self):
        return self.page


class FakeBrowser:
    def __init__(self, page):
        self.page = page
        self.context_options = None
        self.closed = False

    async def new_context(self, **kwargs):
        self.context_options = kwargs
        return FakeContext(self.page)

    async def close(self):
        self.closed = True


class FakeChromium:
    def __init__(self, browser, launch_error: Exception | None = None):
        self.browser = browser
        self.launch_options = None
        self.launch_error = launch_error

    async def launch(self, **kwargs):
        self.launch_options = kwargs
        if self.launch_error is not None:
            raise self.launch_error
        return self.browser


class FakePlaywright:
    """Minimal async Playwright: chromium launcher plus a device table."""

    devices = {
        "iPhone 13": {
            "user_agent": "Mozilla/5.0 (iPhone)",
            "viewport": {"width": 390, "height": 664},
            "screen": {"width": 390, "height": 844},
            "device_scale_factor": 3,
            "is_mobile": True,
            "has_touch": True,
            "default_browser_type": "webkit",
        },
    }

    def __init__(self, page=None, launch_error=None):
        self.page = page or FakePage()
        self.browser = FakeBrowser(self.page)
        self.chromium = FakeChromium(self.browser, launch_error)

    def factory(self):
        @asynccontextmanager
        async def _factory():
            yield self
        return _factory


@pytest.fixture
def settings():
    return Settings(_env_file=None, chrome_path=None, navigation_timeout_ms=2000)


@pytest.fixture
def playwright():
    return FakePlaywright()
