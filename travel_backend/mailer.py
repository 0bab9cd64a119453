import logging
from functools import lru_cache

import requests
import resend
from django.conf import settings
from resend.exceptions import ResendError

logger = logging.getLogger(__name__)


class MailerError(Exception):
    pass


class MailerNotConfigured(MailerError):
    pass


class ResendMailer:
    """
    Thin wrapper over the Resend SDK. One instance per process (see get_mailer).
    """

    def __init__(self, api_key):
        self.api_key = api_key or ""

    @property
    def is_configured(self):
        return bool(self.api_key)

    def send(self, to, subject, html, from_email):
        if not self.is_configured:
            raise MailerNotConfigured("RESEND_API_KEY is not set.")
        if not to:
            raise MailerNotConfigured("No recipient address configured.")
        if not from_email:
            raise MailerNotConfigured("No sender address configured.")

        recipients = list(to) if isinstance(to, (list, tuple)) else [to]
        resend.api_key = self.api_key
        try:
            sent = resend.Emails.send({
                "from": from_email,
                "to": recipients,
                "subject": subject,
                "html": html,
            })
        except (ResendError, requests.RequestException, ValueError) as e:
            raise MailerError(f"Email provider rejected the message: {e}") from e

        message_id = (sent or {}).get("id", "") if isinstance(sent, dict) else getattr(sent, "id", "")
        logger.info("Email sent to %s (id=%s)", ", ".join(recipients), message_id)
        return message_id


@lru_cache(maxsize=1)
def get_mailer():
    return ResendMailer(settings.RESEND_API_KEY)
