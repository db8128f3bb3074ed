import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)


class StatusNotifier:
    """
    Posts short status messages to a Discord webhook. Without a webhook URL
    every call is a no-op, and delivery problems are only logged.
    """
    TIMEOUT_SECONDS = 10

    def __init__(self, webhook_url: Optional[str], session: Optional[requests.Session] = None):
        self.webhook_url = webhook_url
        self._session = session or requests.Session()

    @property
    def enabled(self) -> bool:
        return bool(self.webhook_url)

    def send(self, message: str) -> None:
        if not self.enabled:
            logger.info("Discord webhook URL not set, skipping message: %s", message)
            return

        try:
            response = self._session.post(
                self.webhook_url,
                json={'content': message},
                timeout=self.TIMEOUT_SECONDS,
            )
            response.raise_for_status()
        except Exception as e:
            logger.warning("Could not post status message %r: %s", message, e)
            return
        logger.debug("Status message posted: %s", message)
