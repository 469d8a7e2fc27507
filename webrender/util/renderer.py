"""
Playwright rendering engine.

Renders a URL or an HTML document in headless Chromium and captures it as
an image (png/jpeg/webp), a PDF, or the serialized DOM.

Every render launches its own browser process and closes it again before
returning, whether the capture succeeded or not.
"""

from __future__ import annotations

import io
import asyncio
import logging
from typing import TYPE_CHECKING

from playwright.async_api import async_playwright

from ..config import Settings
from ..errors import RenderError
from .netidle import InflightTracker

if TYPE_CHECKING:
    from ..api.schemas import RenderRequest

logger = logging.getLogger(__name__)

CHROME_ARGS = [
    "--proxy-bypass-list=*",
    "--disable-gpu",
    "--disable-dev-shm-usage",
    "--disable-setuid-sandbox",
    "--no-first-run",
    "--no-sandbox",
    "--no-zygote",
    "--single-process",
    "--ignore-certificate-errors",
    "--ignore-certificate-errors-spki-list",
    "--enable-features=NetworkService",
]

# Device descriptor keys that are not browser-context options.
_NON_CONTEXT_DEVICE_KEYS = ("default_browser_type",)


def png_to_webp(png: bytes) -> bytes:
    """Transcode a PNG screenshot to lossless WebP, keeping transparency."""
    from PIL import Image

    with Image.open(io.BytesIO(png)) as image:
        out = io.BytesIO()
        image.save(out, format="WEBP", lossless=True)
    return out.getvalue()


class PageRenderer:
    """
    Drives one short-lived browser per render call.

    Args:
        settings: Service settings (browser path, timeouts, concurrency).
        playwright_factory: Callable returning an async Playwright context
            manager; defaults to ``async_playwright``.
    """

    def __init__(self, settings: Settings, playwright_factory=async_playwright):
        self._settings = settings
        self._playwright_factory = playwright_factory
        self._semaphore: asyncio.Semaphore | None = None
        if settings.max_concurrent_renders > 0:
            self._semaphore = asyncio.Semaphore(settings.max_concurrent_renders)

    async def render(self, request: RenderRequest) -> bytes | str:
        """
        Render ``request`` and return the captured output.

        Returns:
            bytes for images and PDFs, str for html/text captures.
        """
        if self._semaphore is None:
            return await self._render(request)
        async with self._semaphore:
            return await self._render(request)

    async def _render(self, request: RenderRequest) -> bytes | str:
        async with self._playwright_factory() as p:
            browser = await p.chromium.launch(
                headless=True,
                executable_path=self._settings.chrome_path or None,
                args=CHROME_ARGS,
            )
            try:
                context = await browser.new_context(**self._context_options(p, request))
                page = await context.new_page()
                await self._load(page, request)
                output = await self._capture(page, request)
            finally:
                await browser.close()

        logger.debug(
            "[renderer] Rendered %s as %s",
            request.url or "<inline html>", request.mimetype,
        )
        return output

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _context_options(self, playwright, request: RenderRequest) -> dict:
        """Browser-context options for the requested device emulation."""
        options = {"ignore_https_errors": True}

        if request.emulate:
            try:
                device = playwright.devices[request.emulate]
            except KeyError:
                raise RenderError(f"Unknown device profile: {request.emulate!r}") from None
            options.update(
                {k: v for k, v in device.items() if k not in _NON_CONTEXT_DEVICE_KEYS}
            )
        elif request.width and request.height:
            options.update(
                viewport={"width": request.width, "height": request.height},
                device_scale_factor=request.scale,
                is_mobile=request.mobile,
                has_touch=request.touch,
                user_agent=self._settings.custom_user_agent,
            )
            if request.landscape:
                long_edge = max(request.width, request.height)
                short_edge = min(request.width, request.height)
                options["screen"] = {"width": long_edge, "height": short_edge}

        return options

    async def _load(self, page, request: RenderRequest) -> None:
        timeout = self._settings.navigation_timeout_ms
        if request.url:
            tracker = InflightTracker(page)
            await page.goto(request.url, wait_until="load", timeout=timeout)
            await tracker.wait_for_idle(timeout_ms=timeout)
        else:
            await page.set_content(request.html or "", wait_until="networkidle", timeout=timeout)

    async def _capture(self, page, request: RenderRequest) -> bytes | str:
        kind = request.capture_kind

        if kind == "pdf":
            return await page.pdf(format="Letter", print_background=True)

        if kind in ("html", "text"):
            return await page.content()

        if kind == "jpeg":
            return await page.screenshot(type="jpeg", full_page=request.full)

        image = await page.screenshot(
            type="png",
            full_page=request.full,
            omit_background=request.alpha,
        )
        if kind == "webp":
            image = png_to_webp(image)
        return image
