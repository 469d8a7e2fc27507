"""
Network-idle tracking for a Playwright page.

Playwright's own ``networkidle`` waits for zero in-flight requests. Pages
loaded by URL only need to be "mostly idle": at most two requests still
open for a quiet window, which tolerates long-polling and analytics beacons.
"""

import asyncio
import logging

logger = logging.getLogger(__name__)

IDLE_WINDOW_MS = 500
MOSTLY_IDLE_MAX_INFLIGHT = 2
_POLL_INTERVAL_S = 0.05


class InflightTracker:
    """Counts a page's open requests via its request lifecycle events."""

    def __init__(self, page):
        self._inflight: set = set()
        page.on("request", self._on_request)
        page.on("requestfinished", self._on_request_done)
        page.on("requestfailed", self._on_request_done)

    @property
    def inflight(self) -> int:
        return len(self._inflight)

    def _on_request(self, request) -> None:
        self._inflight.add(request)

    def _on_request_done(self, request) -> None:
        self._inflight.discard(request)

    async def wait_for_idle(
        self,
        max_inflight: int = MOSTLY_IDLE_MAX_INFLIGHT,
        idle_ms: int = IDLE_WINDOW_MS,
        timeout_ms: int = 30000,
    ) -> None:
        """
        Wait until at most ``max_inflight`` requests stay open for ``idle_ms``.

        Raises:
            asyncio.TimeoutError: the page did not settle within ``timeout_ms``.
        """
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout_ms / 1000
        quiet_since = None

        while True:
            now = loop.time()
            if self.inflight <= max_inflight:
                if quiet_since is None:
                    quiet_since = now
                elif now - quiet_since >= idle_ms / 1000:
                    return
            else:
                quiet_since = None

            if now >= deadline:
                raise asyncio.TimeoutError(
                    f"Network did not become idle within {timeout_ms}ms "
                    f"({self.inflight} requests still in flight)"
                )
            await asyncio.sleep(_POLL_INTERVAL_S)
