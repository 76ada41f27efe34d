"""
Console email sender adapter - Implements EmailSender protocol.

This module provides a console-based implementation of the domain's
email sender port, logging rendered mails for local development.
"""

import logging

from src.domain.exceptions import MailDeliveryError
from src.domain.mail import Mail, Mailbox

from .templates import render

logger = logging.getLogger(__name__)


class ConsoleEmailSender:
    """
    Implements EmailSender protocol via console logging.

    Uses structural subtyping - no explicit inheritance from Protocol.
    For demo/development purposes - always accepts the mail.
    """

    def send_mail(self, mail: Mail, recipient: Mailbox) -> None:
        """
        Log the rendered mail (simulates email delivery).

        The plain-text body, including the verification link, is logged at
        INFO level to be visible in docker-compose logs.

        Args:
            mail: Mail variant to deliver
            recipient: Destination mailbox

        Raises:
            MailDeliveryError: If the recipient cannot be put in a To header
        """
        rendered = render(mail)
        try:
            to = str(recipient)
        except ValueError as e:
            raise MailDeliveryError("Recipient cannot be encoded in mail headers") from e

        logger.info(
            "[MAIL] Template: %s To: %s Subject: %s\n%s",
            rendered.template,
            to,
            rendered.subject,
            rendered.text,
        )
