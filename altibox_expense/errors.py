class AutomationError(Exception):
    """Base class for every failure the expense automation knows about."""


class SessionInitError(AutomationError):
    """The browser could not be started."""


class LoginFormTimeout(AutomationError):
    """The login form never showed up."""


class LoginTimeout(AutomationError):
    """Credentials were submitted but the portal never reached the logged-in area."""


class InvoiceControlTimeout(AutomationError):
    """The invoice page did not render its download control or period label."""


class DownloadError(AutomationError):
    """The invoice PDF could not be downloaded or saved."""


class EmailSendError(AutomationError):
    """The email provider rejected the invoice email, or it could not be built."""
