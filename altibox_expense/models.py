import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class InvoiceLocation:
    """Where to click to download the invoice that matched the current month."""
    download_selector: str
    period_label: str


@dataclass(frozen=True)
class InvoiceRecord:
    filename: str
    filepath: str
    captured_at: datetime


class RunState(enum.Enum):
    INIT = "init"
    AUTHENTICATING = "authenticating"
    LOCATING = "locating"
    DOWNLOADING = "downloading"
    NOTIFYING = "notifying"
    FAILED = "failed"
    CLEANUP = "cleanup"
    DONE = "done"


class OutcomeKind(enum.Enum):
    INVOICE_SENT = "invoice_sent"
    NO_INVOICE_THIS_MONTH = "no_invoice_this_month"
    FAILED = "failed"


STATUS_MESSAGES = {
    OutcomeKind.INVOICE_SENT: "Invoice email sent to Visma",
    OutcomeKind.NO_INVOICE_THIS_MONTH: "No invoice found for current month",
    OutcomeKind.FAILED: "Automation failed",
}


@dataclass(frozen=True)
class RunOutcome:
    kind: OutcomeKind
    reason: Optional[str] = None

    @classmethod
    def invoice_sent(cls) -> "RunOutcome":
        return cls(OutcomeKind.INVOICE_SENT)

    @classmethod
    def no_invoice(cls) -> "RunOutcome":
        return cls(OutcomeKind.NO_INVOICE_THIS_MONTH)

    @classmethod
    def failed(cls, reason: str) -> "RunOutcome":
        return cls(OutcomeKind.FAILED, reason)

    @property
    def status_message(self) -> str:
        return STATUS_MESSAGES[self.kind]
