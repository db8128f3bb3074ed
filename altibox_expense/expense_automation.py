import logging
from contextlib import contextmanager
from datetime import date
from typing import Callable, List, Optional

from .altibox_client import AltiboxClient
from .browser_manager import BrowserManager
from .email_client import EmailClient
from .errors import EmailSendError, SessionInitError
from .models import RunOutcome, RunState
from .status_notifier import StatusNotifier

logger = logging.getLogger(__name__)


class ExpenseAutomation:
    """
    One run of the Altibox -> Visma expense flow:

        init -> authenticating -> locating -> downloading -> notifying -> cleanup -> done
                                          \\-> notifying (no invoice) -> cleanup -> done

    Any failure before notifying jumps to failed, reports it, and still goes
    through cleanup. Cleanup only happens when the browser was opened, and
    exactly once.
    """

    def __init__(
        self,
        cfg,
        browser: Optional[BrowserManager] = None,
        client_factory: Callable = AltiboxClient,
        email_client: Optional[EmailClient] = None,
        notifier: Optional[StatusNotifier] = None,
        today: Callable[[], date] = date.today,
    ):
        self.cfg = cfg
        self.browser = browser or BrowserManager(slow_mo_ms=cfg.browser_slow_mo_ms)
        self.client_factory = client_factory
        self.email_client = email_client or EmailClient(cfg)
        self.notifier = notifier or StatusNotifier(cfg.discord_webhook_url)
        self.today = today
        self.history: List[RunState] = []

    @property
    def state(self) -> Optional[RunState]:
        return self.history[-1] if self.history else None

    def _enter(self, state: RunState) -> None:
        logger.info("State: %s -> %s", self.state.value if self.state else "-", state.value)
        self.history.append(state)

    @contextmanager
    def _session(self):
        page = self.browser.open(self.cfg.browser_headless)
        try:
            yield page
        finally:
            self._enter(RunState.CLEANUP)
            logger.info("Cleaning up browser")
            self.browser.close()

    def run(self) -> RunOutcome:
        self.history = []
        self._enter(RunState.INIT)
        try:
            with self._session() as page:
                outcome = self._run_in_session(page)
        except SessionInitError as e:
            outcome = self._fail(e)
        self._enter(RunState.DONE)
        logger.info("Run finished: %s", outcome.kind.value)
        return outcome

    def _run_in_session(self, page) -> RunOutcome:
        try:
            client = self.client_factory(self.cfg, page, today=self.today)

            self._enter(RunState.AUTHENTICATING)
            client.login()

            self._enter(RunState.LOCATING)
            location = client.check_for_invoice()
            if location is not None:
                self._enter(RunState.DOWNLOADING)
                record = client.download_invoice(location)
        except Exception as e:
            return self._fail(e)

        if location is None:
            outcome = RunOutcome.no_invoice()
            self._enter(RunState.NOTIFYING)
            self.notifier.send(outcome.status_message)
            return outcome

        outcome = RunOutcome.invoice_sent()
        self._enter(RunState.NOTIFYING)
        try:
            self.email_client.send(record)
        except EmailSendError as e:
            logger.error("Invoice email was not delivered: %s", e)
        self.notifier.send(outcome.status_message)
        return outcome

    def _fail(self, error: Exception) -> RunOutcome:
        self._enter(RunState.FAILED)
        logger.exception("Automation failed: %s", error)
        outcome = RunOutcome.failed(f"{type(error).__name__}: {error}")
        self.notifier.send(outcome.status_message)
        return outcome
