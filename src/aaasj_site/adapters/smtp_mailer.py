"""SMTP mail delivery."""

import asyncio
import logging
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Protocol

from aaasj_site.domain.scholarship import OutgoingEmail
from aaasj_site.errors import MailDeliveryError

_logger = logging.getLogger(__name__)


class Mailer(Protocol):
    """Interface for sending email."""

    async def send(self, message: OutgoingEmail) -> str:
        """Send a message and return its Message-ID."""


@dataclass
class SmtpMailer(Mailer):
    """Mailer that talks to an SMTP server with smtplib."""

    host: str
    port: int
    username: str
    password: str
    use_ssl: bool = False
    timeout: float = 30

    async def send(self, message: OutgoingEmail) -> str:
        """Send the message from a worker thread."""
        return await asyncio.to_thread(self._send_blocking, message)

    def _send_blocking(self, message: OutgoingEmail) -> str:
        try:
            email_message = build_email_message(message)
        except ValueError as exc:
            raise MailDeliveryError(f"Invalid email message: {exc}") from exc
        try:
            with self._connect() as smtp:
                smtp.login(self.username, self.password)
                refused = smtp.send_message(email_message)
        except (smtplib.SMTPException, OSError) as exc:
            raise MailDeliveryError(f"SMTP delivery failed: {exc}") from exc
        if refused:
            _logger.warning("SMTP refused recipients: %s", refused)
        return str(email_message["Message-ID"])

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        smtp = smtplib.SMTP(self.host, self.port, timeout=self.timeout)
        smtp.ehlo()
        if smtp.has_extn("starttls"):
            smtp.starttls()
            smtp.ehlo()
        return smtp


def build_email_message(message: OutgoingEmail) -> EmailMessage:
    """Convert an outgoing email into a MIME message with attachments."""
    email_message = EmailMessage()
    email_message["From"] = message.sender
    email_message["To"] = message.to
    email_message["Subject"] = message.subject
    if message.reply_to:
        email_message["Reply-To"] = message.reply_to
    email_message["Message-ID"] = make_msgid(domain=_sender_domain(message.sender))
    email_message.set_content(message.text)
    for attachment in message.attachments:
        maintype, _, subtype = (
            attachment.content_type or "application/octet-stream"
        ).partition("/")
        email_message.add_attachment(
            attachment.content,
            maintype=maintype,
            subtype=subtype or "octet-stream",
            filename=attachment.filename,
        )
    return email_message


def _sender_domain(sender: str) -> str | None:
    address = sender.rsplit("<", 1)[-1].rstrip(">")
    if "@" not in address:
        return None
    return address.rsplit("@", 1)[-1]
