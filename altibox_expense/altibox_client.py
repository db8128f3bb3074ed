import logging
import os
import time
from datetime import date, datetime, timezone
from typing import Callable, Optional

from babel.dates import format_date
from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from .errors import (
    DownloadError, InvoiceControlTimeout, LoginFormTimeout, LoginTimeout,
)
from .models import InvoiceLocation, InvoiceRecord

logger = logging.getLogger(__name__)


def current_period_label(today: date, locale: str) -> str:
    """Month and year as the portal prints them, e.g. 'oktober 2025' for nb_NO."""
    return format_date(today, format="MMMM y", locale=locale)


def period_matches(label: Optional[str], current: str) -> bool:
    if not label:
        return False
    return current.lower() in label.lower()


class AltiboxClient:
    """
    Drives the Altibox customer pages on an already open Playwright page:
    1. login() with the configured credentials
    2. check_for_invoice() to see if the newest invoice belongs to this month
    3. download_invoice() to save that invoice's PDF
    """
    USERNAME_INPUT = 'input[autocomplete="username"]'
    PASSWORD_INPUT = 'input[autocomplete="current-password"]'
    LOGIN_BUTTON = 'button[aria-label="login"]'
    LOGGED_IN_URL_PATTERN = "**/minesider/**"
    COOKIE_DECLINE_BUTTON = 'button[id="CybotCookiebotDialogBodyButtonDecline"]'
    DOWNLOAD_BUTTON = (
        'div[class^="invoice_detailsButtonContainer"] '
        'fds-button[variant="primary"]:has-text("Last ned PDF")'
    )
    INVOICE_PERIOD_LABEL = 'dt[class^="desktop-max-typography_formds-common-subtitle-secondary__"]'

    LOGIN_FORM_TIMEOUT_MS = 10000
    LOGIN_TIMEOUT_MS = 15000
    COOKIE_TIMEOUT_MS = 30000
    COOKIE_SETTLE_MS = 3000
    INVOICE_CONTROL_TIMEOUT_MS = 10000
    DOWNLOAD_TIMEOUT_MS = 30000

    def __init__(self, cfg, page, today: Callable[[], date] = date.today):
        self.cfg = cfg
        self._page = page
        self._today = today

    def login(self) -> None:
        page = self._page
        logger.info("Logging into Altibox")
        page.goto(self.cfg.altibox_login_url)

        try:
            page.wait_for_selector(self.USERNAME_INPUT, timeout=self.LOGIN_FORM_TIMEOUT_MS)
        except PlaywrightTimeoutError as e:
            raise LoginFormTimeout(
                f"Login form did not appear within {self.LOGIN_FORM_TIMEOUT_MS}ms") from e

        logger.debug("Filling credentials for %s", self.cfg.altibox_username)
        page.fill(self.USERNAME_INPUT, self.cfg.altibox_username)
        page.fill(self.PASSWORD_INPUT, self.cfg.altibox_password)
        page.click(self.LOGIN_BUTTON)

        try:
            page.wait_for_url(self.LOGGED_IN_URL_PATTERN, timeout=self.LOGIN_TIMEOUT_MS)
        except PlaywrightTimeoutError as e:
            raise LoginTimeout(f"Login did not complete within {self.LOGIN_TIMEOUT_MS}ms") from e
        logger.info("Successfully logged in, current page: %s", page.url)

    def dismiss_cookie_dialog(self) -> bool:
        """Decline the Cookiebot dialog if it shows up. Returns whether it was clicked."""
        page = self._page
        try:
            page.wait_for_selector(self.COOKIE_DECLINE_BUTTON, timeout=self.COOKIE_TIMEOUT_MS)
            logger.debug("Cookiebot button found")
            page.click(self.COOKIE_DECLINE_BUTTON)
        except PlaywrightError as e:
            logger.info("No cookie message found (%s)", e)
            return False
        logger.info("Cookie dialog declined")
        page.wait_for_timeout(self.COOKIE_SETTLE_MS)
        return True

    def check_for_invoice(self) -> Optional[InvoiceLocation]:
        page = self._page
        logger.info("Navigating to invoice page")
        page.goto(self.cfg.altibox_invoice_url)
        self.dismiss_cookie_dialog()

        logger.info("Checking for new invoices")
        try:
            page.wait_for_selector(self.DOWNLOAD_BUTTON, timeout=self.INVOICE_CONTROL_TIMEOUT_MS)
            label = page.locator(self.INVOICE_PERIOD_LABEL).first.text_content(
                timeout=self.INVOICE_CONTROL_TIMEOUT_MS)
        except PlaywrightTimeoutError as e:
            raise InvoiceControlTimeout(
                f"Invoice download control did not appear within "
                f"{self.INVOICE_CONTROL_TIMEOUT_MS}ms") from e

        current = current_period_label(self._today(), self.cfg.invoice_locale)
        logger.debug("Latest invoice period %r, current month %r", label, current)
        if not period_matches(label, current):
            logger.info("No invoice found for current month")
            return None

        logger.info("Found new invoice for current month: %s", label.strip())
        return InvoiceLocation(download_selector=self.DOWNLOAD_BUTTON, period_label=label.strip())

    def download_invoice(self, location: InvoiceLocation) -> InvoiceRecord:
        page = self._page
        try:
            with page.expect_download(timeout=self.DOWNLOAD_TIMEOUT_MS) as download_info:
                logger.debug("Clicking download button: %s", location.download_selector)
                page.locator(location.download_selector).first.click()
            download = download_info.value

            filename = download.suggested_filename or f"invoice-{int(time.time() * 1000)}.pdf"
            filepath = os.path.abspath(os.path.join(self.cfg.download_dir, filename))
            download.save_as(filepath)
        except (PlaywrightError, OSError) as e:
            logger.error("Invoice download failed: %s", e)
            raise DownloadError(f"Could not download invoice: {e}") from e

        logger.info("Downloaded invoice: %s", filepath)
        return InvoiceRecord(
            filename=filename,
            filepath=filepath,
            captured_at=datetime.now(timezone.utc),
        )
