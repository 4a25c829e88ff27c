import asyncio
import logging
import random
from contextlib import asynccontextmanager

from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError

from ..config import DEFAULT_USER_AGENT
from ..models.listing import Listing

logger = logging.getLogger(__name__)


class BrowserListingSource:
    """Listings source backed by one headless Chromium per run.

    Subclasses implement ``fetch(platform, limit)``. The source must be
    entered with ``async with`` before fetching; leaving the block closes the
    browser even when the scan failed.
    """

    platform = ""
    NAV_RETRIES = 3
    VIEWPORT = {"width": 1366, "height": 900}

    def __init__(
        self,
        delay: float = 3.0,
        headless: bool = True,
        user_agent: str | None = None,
    ):
        self.delay = delay
        self.headless = headless
        self.user_agent = user_agent or DEFAULT_USER_AGENT
        self._pw: Playwright | None = None
        self._browser: Browser | None = None

    async def __aenter__(self):
        self._pw = await async_playwright().start()
        try:
            self._browser = await self._pw.chromium.launch(headless=self.headless)
        except Exception:
            await self._pw.stop()
            self._pw = None
            raise
        logger.debug(f"Chromium launched for {self.platform or type(self).__name__}")
        return self

    async def __aexit__(self, *exc):
        browser, pw = self._browser, self._pw
        self._browser = self._pw = None
        if browser is not None:
            await browser.close()
        if pw is not None:
            await pw.stop()

    async def fetch(self, platform: str, limit: int) -> list[Listing]:
        raise NotImplementedError

    @asynccontextmanager
    async def open_page(self):
        """Yield a page in a fresh browser context, closed on exit."""
        if self._browser is None:
            raise RuntimeError(f"{type(self).__name__} must be entered with 'async with' first")
        context = await self._browser.new_context(
            user_agent=self.user_agent,
            viewport=self.VIEWPORT,
            locale="en-US",
        )
        try:
            yield await context.new_page()
        finally:
            await context.close()

    async def throttle(self):
        # +/-50% jitter around the configured delay
        await asyncio.sleep(self.delay * random.uniform(0.5, 1.5))

    async def goto(
        self,
        page: Page,
        url: str,
        wait_selector: str | None = None,
        timeout_ms: int = 15000,
    ) -> bool:
        """Load ``url``, retrying with 1s/2s pauses. False when every attempt failed."""
        for attempt in range(1, self.NAV_RETRIES + 1):
            try:
                await page.goto(url, wait_until="domcontentloaded", timeout=timeout_ms)
                if wait_selector:
                    await page.wait_for_selector(wait_selector, timeout=timeout_ms)
                return True
            except PlaywrightError as e:
                if attempt == self.NAV_RETRIES:
                    logger.error(f"Giving up on {url} after {attempt} attempts: {e}")
                    return False
                logger.warning(f"Load attempt {attempt} for {url} failed, retrying: {e}")
                await asyncio.sleep(2 ** (attempt - 1))
        return False
