import base64
import logging

import resend

from .errors import EmailSendError
from .models import InvoiceRecord

logger = logging.getLogger(__name__)


class EmailClient:
    """
    Sends the downloaded invoice to Visma as an attachment through Resend.
    """
    SUBJECT = 'Altibox invoice - Expense'
    HTML_BODY = '<p>Invoice attached</p>'

    def __init__(self, cfg):
        self.cfg = cfg

    def send(self, record: InvoiceRecord) -> None:
        logger.info("Sending invoice %s to %s", record.filename, self.cfg.visma_email)
        try:
            with open(record.filepath, 'rb') as f:
                attachment = base64.b64encode(f.read()).decode('ascii')

            resend.api_key = self.cfg.resend_api_key
            params = {
                'from': self.cfg.resend_email_from,
                'to': [self.cfg.visma_email],
                'subject': self.SUBJECT,
                'html': self.HTML_BODY,
                'attachments': [
                    {'content': attachment, 'filename': record.filename},
                ],
            }
            response = resend.Emails.send(params)
        except Exception as e:
            logger.error("Failed to send email: %s", e)
            raise EmailSendError(f"Failed to send invoice email: {e}") from e

        logger.info("Invoice email sent successfully (id=%s)", (response or {}).get('id'))
