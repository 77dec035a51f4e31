"""
Browser session manager for SEO Analyzer
Holds a single reusable Playwright browser and hands out pages on demand
"""

import asyncio
import enum
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional
from playwright.async_api import async_playwright, Browser, Page, Playwright
import logging

from config import settings
from utils.screenshot_capture import capture_screenshots

logger = logging.getLogger(__name__)


class LaunchFailure(RuntimeError):
    """Raised when the browser provider could not start a session"""

    pass


class SessionState(enum.Enum):
    ABSENT = "absent"
    CONNECTED = "connected"
    CLOSED = "closed"


class BrowserSession:
    """
    Owns the lifecycle of one browser connection.

    The session is launched lazily on first use and reused while it stays
    connected. A keep-alive timer extends its life in fixed ticks; once the
    idle budget is spent and no page is checked out, the browser is closed.
    Callers acquire pages through ``page()`` so they are always closed again.
    """

    def __init__(
        self,
        keep_alive_seconds: int = settings.KEEP_BROWSER_ALIVE_SECONDS,
        tick_seconds: int = settings.KEEP_ALIVE_TICK_SECONDS,
        ws_endpoint: Optional[str] = settings.BROWSER_WS_ENDPOINT,
        launch_timeout: int = settings.BROWSER_LAUNCH_TIMEOUT,
    ):
        """
        Initialize the session holder.

        Args:
            keep_alive_seconds: Idle budget before the browser is torn down
            tick_seconds: Keep-alive timer increment
            ws_endpoint: CDP endpoint of a remote browser; local Chromium when None
            launch_timeout: Max seconds to wait for the browser to start
        """
        self.keep_alive_seconds = keep_alive_seconds
        self.tick_seconds = tick_seconds
        self.ws_endpoint = ws_endpoint
        self.launch_timeout = launch_timeout

        self.playwright: Optional[Playwright] = None
        self.browser: Optional[Browser] = None
        self.state = SessionState.ABSENT
        self.kept_alive_seconds = 0
        self.pages_in_use = 0

        self._lock = asyncio.Lock()
        self._keep_alive_task: Optional[asyncio.Task] = None

    def is_connected(self) -> bool:
        return self.browser is not None and self.browser.is_connected()

    async def ensure_session(self) -> Browser:
        """
        Return the live browser, launching a new one if none is held or the
        held one has disconnected. Concurrent callers share a single launch.

        Raises:
            LaunchFailure: If the provider could not start the browser
        """
        if self.is_connected():
            return self.browser

        async with self._lock:
            return await self._ensure_locked()

    async def _ensure_locked(self) -> Browser:
        """Launch a browser if needed; caller holds ``self._lock``"""
        if self.is_connected():
            return self.browser

        logger.info("🚀 Browser Manager: Starting new instance")
        try:
            self.browser = await asyncio.wait_for(
                self._launch(), timeout=self.launch_timeout
            )
        except Exception as e:
            logger.error(f"❌ Browser Manager: Could not start browser instance. Error: {e}")
            self.browser = None
            raise LaunchFailure(str(e) or e.__class__.__name__) from e

        self.state = SessionState.CONNECTED
        logger.info("✅ Browser Manager: Browser connected")
        return self.browser

    async def _launch(self) -> Browser:
        """Start Playwright if needed and launch or connect a Chromium browser"""
        if self.playwright is None:
            self.playwright = await async_playwright().start()

        if self.ws_endpoint:
            return await self.playwright.chromium.connect_over_cdp(self.ws_endpoint)

        return await self.playwright.chromium.launch(
            headless=True,
            args=[
                "--disable-dev-shm-usage",  # Prevents memory issues in Docker
                "--no-sandbox",  # Required in some containerized environments
                "--disable-setuid-sandbox",
                "--disable-gpu",
            ],
        )

    @asynccontextmanager
    async def page(self) -> AsyncIterator[Page]:
        """
        Acquire a fresh page on the shared browser.

        The page is closed on every exit path, and the session is not torn
        down by the keep-alive timer while the page is checked out.
        """
        # Checkout and teardown are serialised on the same lock
        async with self._lock:
            browser = await self._ensure_locked()
            self.pages_in_use += 1
            self.kept_alive_seconds = 0
        self._arm_keep_alive()

        page = None
        try:
            page = await browser.new_page()
            yield page
        finally:
            self.pages_in_use -= 1
            if page is not None:
                try:
                    await page.close()
                except Exception as e:
                    logger.warning(f"⚠️  Error closing page: {str(e)}")

    def _arm_keep_alive(self):
        if self._keep_alive_task is None or self._keep_alive_task.done():
            self._keep_alive_task = asyncio.create_task(self._keep_alive())

    async def _keep_alive(self):
        while True:
            await asyncio.sleep(self.tick_seconds)
            if await self.alarm():
                return

    async def alarm(self) -> bool:
        """
        Advance the keep-alive counter by one tick.

        Returns:
            True once the session has been closed
        """
        async with self._lock:
            self.kept_alive_seconds += self.tick_seconds

            if self.kept_alive_seconds < self.keep_alive_seconds:
                logger.debug(
                    f"Browser session: has been kept alive for {self.kept_alive_seconds} seconds. "
                    f"Extending lifespan."
                )
                return False

            if self.pages_in_use:
                logger.debug(f"Browser session: {self.pages_in_use} page(s) in use, not closing")
                return False

            logger.info(f"⏱️  Browser session: exceeded life of {self.keep_alive_seconds}s.")
            await self._close_locked()
            return True

    async def _close_browser(self):
        async with self._lock:
            await self._close_locked()

    async def _close_locked(self):
        """Detach and close the held browser; caller holds ``self._lock``"""
        browser, self.browser = self.browser, None
        if self.state is not SessionState.ABSENT:
            self.state = SessionState.CLOSED

        if browser is not None:
            logger.info("🧹 Closing browser.")
            try:
                await browser.close()
            except Exception as e:
                logger.warning(f"⚠️  Error closing browser: {str(e)}")

    async def capture_screenshots(self, url: str, store) -> list:
        """Capture the fixed viewport set for ``url`` into ``store``"""
        return await capture_screenshots(self, store, url)

    async def health_check(self) -> dict:
        """
        Report the session state.

        Returns:
            Dictionary with health status
        """
        return {
            "state": self.state.value,
            "connected": self.is_connected(),
            "pages_in_use": self.pages_in_use,
            "idle_seconds": self.kept_alive_seconds,
            "keep_alive_budget_seconds": self.keep_alive_seconds,
        }

    async def cleanup(self):
        """Close the browser, stop Playwright and cancel the keep-alive timer"""
        logger.info("🧹 Cleaning up browser session...")

        task = self._keep_alive_task
        self._keep_alive_task = None
        if task is not None and not task.done() and task is not asyncio.current_task():
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

        await self._close_browser()
        self.state = SessionState.CLOSED

        if self.playwright:
            try:
                await self.playwright.stop()
            except Exception as e:
                logger.warning(f"⚠️  Error stopping Playwright: {str(e)}")
            self.playwright = None

        logger.info("✅ Browser session cleaned up")


# Global browser session for the "browser" identifier
_browser_session: Optional[BrowserSession] = None


async def get_browser_session() -> BrowserSession:
    """
    Get or create the global browser session holder.
    The browser itself is launched lazily on first page acquisition.

    Returns:
        BrowserSession instance
    """
    global _browser_session

    if _browser_session is None:
        _browser_session = BrowserSession()

    return _browser_session


async def close_browser_session():
    """Close the global browser session"""
    global _browser_session

    if _browser_session is not None:
        await _browser_session.cleanup()
        _browser_session = None
