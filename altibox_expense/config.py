import os
import re
import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional
from urllib.parse import urlparse

from babel import Locale, UnknownLocaleError

logger = logging.getLogger(__name__)

DEFAULT_LOGIN_URL = "https://www.altibox.no/minesider/login"
DEFAULT_INVOICE_URL = "https://www.altibox.no/minesider/konto/faktura"
DEFAULT_DOWNLOAD_DIR = "./downloads"
DEFAULT_LOCALE = "nb_NO"
DEFAULT_SLOW_MO_MS = 1000

TRUE_VALUES = {"true", "1", "yes", "on", "y", "enabled"}
FALSE_VALUES = {"false", "0", "no", "off", "n", "disabled"}
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise EnvironmentError(f"{name} must be a boolean, got {raw!r}")


def validate_url(name: str, raw: str) -> str:
    parsed = urlparse(raw)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise EnvironmentError(f"{name} must be an http(s) URL, got {raw!r}")
    return raw


@dataclass(frozen=True)
class Config:
    """
    Immutable run configuration read from the environment.
    Call load_dotenv() first if the values live in a .env file.
    """
    REQUIRED_VARS = (
        'ALTIBOX_USERNAME', 'ALTIBOX_PASSWORD',
        'VISMA_EMAIL', 'RESEND_API_KEY', 'RESEND_EMAIL_FROM',
    )

    altibox_username: str
    altibox_password: str = field(repr=False)
    visma_email: str
    resend_api_key: str = field(repr=False)
    resend_email_from: str
    altibox_login_url: str = DEFAULT_LOGIN_URL
    altibox_invoice_url: str = DEFAULT_INVOICE_URL
    browser_headless: bool = True
    browser_slow_mo_ms: int = DEFAULT_SLOW_MO_MS
    discord_webhook_url: Optional[str] = None
    download_dir: str = DEFAULT_DOWNLOAD_DIR
    invoice_locale: str = DEFAULT_LOCALE

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        env = os.environ if environ is None else environ

        def get(name, default=None):
            value = env.get(name, "").strip()
            return value or default

        missing = [v for v in cls.REQUIRED_VARS if not get(v)]
        if missing:
            raise EnvironmentError(f"Missing required env vars: {', '.join(missing)}")

        visma_email = get('VISMA_EMAIL')
        if not EMAIL_PATTERN.match(visma_email):
            raise EnvironmentError(f"VISMA_EMAIL is not a valid email address: {visma_email!r}")

        slow_mo_raw = get('BROWSER_SLOW_MO_MS', str(DEFAULT_SLOW_MO_MS))
        try:
            slow_mo = int(slow_mo_raw)
        except ValueError:
            raise EnvironmentError(f"BROWSER_SLOW_MO_MS must be an integer, got {slow_mo_raw!r}")
        if slow_mo < 0:
            raise EnvironmentError("BROWSER_SLOW_MO_MS must not be negative")

        locale = get('INVOICE_LOCALE', DEFAULT_LOCALE)
        try:
            Locale.parse(locale)
        except (UnknownLocaleError, ValueError):
            raise EnvironmentError(f"INVOICE_LOCALE is not a known locale: {locale!r}")

        webhook = get('DISCORD_WEBHOOK_URL')
        if webhook:
            validate_url('DISCORD_WEBHOOK_URL', webhook)
        else:
            logger.info("DISCORD_WEBHOOK_URL not set; status messages are disabled")

        return cls(
            altibox_username=get('ALTIBOX_USERNAME'),
            altibox_password=get('ALTIBOX_PASSWORD'),
            visma_email=visma_email,
            resend_api_key=get('RESEND_API_KEY'),
            resend_email_from=get('RESEND_EMAIL_FROM'),
            altibox_login_url=validate_url(
                'ALTIBOX_LOGIN_URL', get('ALTIBOX_LOGIN_URL', DEFAULT_LOGIN_URL)),
            altibox_invoice_url=validate_url(
                'ALTIBOX_INVOICE_URL', get('ALTIBOX_INVOICE_URL', DEFAULT_INVOICE_URL)),
            browser_headless=parse_bool('BROWSER_HEADLESS', get('BROWSER_HEADLESS', 'true')),
            browser_slow_mo_ms=slow_mo,
            discord_webhook_url=webhook,
            download_dir=get('DOWNLOAD_DIR', DEFAULT_DOWNLOAD_DIR),
            invoice_locale=locale,
        )
