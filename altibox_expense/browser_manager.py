import logging
from typing import Optional

from playwright.sync_api import sync_playwright, Browser, BrowserContext, Page, Playwright

from .errors import SessionInitError

logger = logging.getLogger(__name__)


class BrowserManager:
    """
    Launches one Chromium session for a run and tears it down again.
    close() is safe to call at any time, any number of times.
    """

    def __init__(self, slow_mo_ms: int = 0):
        self.slow_mo_ms = slow_mo_ms
        self._pw: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self.page: Optional[Page] = None

    def open(self, headless: bool) -> Page:
        if self.page is not None:
            raise SessionInitError("A browser session is already open")

        logger.info("Initializing browser (headless=%s, slow_mo=%dms)", headless, self.slow_mo_ms)
        try:
            self._pw = sync_playwright().start()
            self._browser = self._pw.chromium.launch(
                headless=headless,
                slow_mo=self.slow_mo_ms,
            )
            self._context = self._browser.new_context(accept_downloads=True)
            self.page = self._context.new_page()
        except Exception as e:
            logger.error("Browser initialization failed: %s", e)
            self.close()
            raise SessionInitError(f"Could not start browser: {e}") from e

        logger.info("Browser initialization complete (version=%s)", self._browser.version)
        return self.page

    def close(self) -> None:
        if self._browser:
            try:
                self._browser.close()
                logger.debug("Browser closed")
            except Exception as e:
                logger.warning("Could not close browser cleanly: %s", e)
        if self._pw:
            try:
                logger.info("Stopping Playwright")
                self._pw.stop()
            except Exception as e:
                logger.warning("Could not stop Playwright cleanly: %s", e)
        self._pw = None
        self._browser = None
        self._context = None
        self.page = None
