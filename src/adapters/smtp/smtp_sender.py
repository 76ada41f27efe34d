"""
SMTP email sender adapter - Implements EmailSender protocol.

Delivers rendered mails through an SMTP relay using smtplib. Each call opens
its own connection, so the sender is safe to share between threads.

A mail counts as accepted once the relay accepts the message for at least
the single recipient. Delivery is not retried here; a failure surfaces as
MailDeliveryError and aborts the registration that requested it.
"""

import logging
import smtplib
from email.message import EmailMessage

from src.domain.exceptions import MailDeliveryError
from src.domain.mail import Mail, Mailbox

from .templates import render

logger = logging.getLogger(__name__)


class SmtpEmailSender:
    """
    Implements EmailSender protocol via smtplib.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(
        self,
        host: str,
        port: int,
        sender: Mailbox,
        username: str | None = None,
        password: str | None = None,
        starttls: bool = True,
        timeout_seconds: float = 10.0,
    ) -> None:
        self._host = host
        self._port = port
        self._sender = sender
        self._username = username
        self._password = password
        self._starttls = starttls
        self._timeout_seconds = timeout_seconds

    def __repr__(self) -> str:
        return f"{type(self).__name__}(host={self._host!r}, port={self._port})"

    def build_message(self, mail: Mail, recipient: Mailbox) -> EmailMessage:
        """Render mail into a multipart text/html message."""
        rendered = render(mail)

        message = EmailMessage()
        message["From"] = str(self._sender)
        message["To"] = str(recipient)
        message["Subject"] = rendered.subject
        message.set_content(rendered.text)
        message.add_alternative(rendered.html, subtype="html")
        return message

    def send_mail(self, mail: Mail, recipient: Mailbox) -> None:
        """
        Deliver mail to recipient.

        Raises:
            MailDeliveryError: If the recipient cannot be put in a header,
                or the relay is unreachable, times out, rejects
                authentication or refuses the recipient
        """
        try:
            message = self.build_message(mail, recipient)
        except ValueError as e:
            # email.headerregistry refuses CR/LF in address parts
            raise MailDeliveryError("Recipient cannot be encoded in mail headers") from e

        try:
            with smtplib.SMTP(self._host, self._port, timeout=self._timeout_seconds) as client:
                if self._starttls:
                    client.starttls()
                if self._username:
                    client.login(self._username, self._password or "")
                refused = client.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            raise MailDeliveryError(f"SMTP delivery to {self._host}:{self._port} failed") from e

        if refused:
            raise MailDeliveryError("SMTP relay refused the recipient")

        logger.debug("Mail %s accepted by %s:%d", mail.template, self._host, self._port)
