"""
Notification dispatcher - Builds and hands off registration mails.
"""

from dataclasses import dataclass

from .mail import Mailbox, VerifyUserEmail
from .ports import EmailSender


def verification_url(app_url: str, token: str) -> str:
    """Link the user follows to confirm their email address."""
    return f"{app_url.rstrip('/')}/verify-email?token={token}"


@dataclass
class NotificationDispatcher:
    """
    Sends the verification mail for a freshly provisioned user.

    Delivery errors propagate as MailDeliveryError; retry policy, if any,
    belongs to the transport.
    """

    email_sender: EmailSender
    app_url: str

    def send_verification(self, recipient: Mailbox, token: str) -> None:
        mail = VerifyUserEmail(url=verification_url(self.app_url, token))
        self.email_sender.send_mail(mail, recipient)
