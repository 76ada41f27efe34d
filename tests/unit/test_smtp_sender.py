"""
Unit tests for SmtpEmailSender adapter.

smtplib.SMTP is patched; no network connection is made.
"""

import smtplib
import socket
from unittest.mock import MagicMock, patch

import pytest

from src.adapters.smtp.smtp_sender import SmtpEmailSender
from src.domain.exceptions import MailDeliveryError
from src.domain.mail import Mailbox, VerifyUserEmail

ADA = Mailbox(name="Ada Lovelace", address="ada@example.com")
MAIL = VerifyUserEmail(url="https://app.example.com/verify-email?token=abc.def.ghi")
SENDER = Mailbox(name="Onboarding", address="no-reply@example.com")


@pytest.fixture
def smtp_client() -> MagicMock:
    client = MagicMock()
    client.send_message.return_value = {}
    return client


@pytest.fixture
def smtp_class(smtp_client: MagicMock):
    with patch("src.adapters.smtp.smtp_sender.smtplib.SMTP") as smtp:
        smtp.return_value.__enter__.return_value = smtp_client
        yield smtp


def build_sender(**kwargs) -> SmtpEmailSender:
    options = {"host": "smtp.example.com", "port": 587, "sender": SENDER}
    options.update(kwargs)
    return SmtpEmailSender(**options)


class TestBuildMessage:
    """Tests for message construction."""

    def test_headers(self) -> None:
        message = build_sender().build_message(MAIL, ADA)

        assert message["From"] == "Onboarding <no-reply@example.com>"
        assert message["To"] == "Ada Lovelace <ada@example.com>"
        assert message["Subject"] == "Verify your email address"

    def test_text_and_html_parts(self) -> None:
        message = build_sender().build_message(MAIL, ADA)

        text = message.get_body(preferencelist=("plain",)).get_content()
        html = message.get_body(preferencelist=("html",)).get_content()
        assert MAIL.url in text
        assert 'href="https://app.example.com/verify-email?token=abc.def.ghi"' in html


class TestSendMail:
    """Tests for send_mail method."""

    def test_connects_with_timeout(self, smtp_class: MagicMock) -> None:
        build_sender(timeout_seconds=3.0).send_mail(MAIL, ADA)

        smtp_class.assert_called_once_with("smtp.example.com", 587, timeout=3.0)

    def test_starttls_and_login(self, smtp_class: MagicMock, smtp_client: MagicMock) -> None:
        build_sender(username="relay", password="s3cret").send_mail(MAIL, ADA)

        smtp_client.starttls.assert_called_once()
        smtp_client.login.assert_called_once_with("relay", "s3cret")
        smtp_client.send_message.assert_called_once()

    def test_no_starttls_no_login(self, smtp_class: MagicMock, smtp_client: MagicMock) -> None:
        """Local relays without TLS or credentials are supported."""
        build_sender(starttls=False).send_mail(MAIL, ADA)

        smtp_client.starttls.assert_not_called()
        smtp_client.login.assert_not_called()
        smtp_client.send_message.assert_called_once()

    @pytest.mark.parametrize(
        "error",
        [
            smtplib.SMTPAuthenticationError(535, b"bad credentials"),
            smtplib.SMTPServerDisconnected("gone"),
            ConnectionRefusedError("refused"),
            socket.timeout("timed out"),
        ],
    )
    def test_transport_errors_raise_mail_delivery_error(
        self, smtp_class: MagicMock, smtp_client: MagicMock, error: Exception
    ) -> None:
        smtp_client.send_message.side_effect = error

        with pytest.raises(MailDeliveryError):
            build_sender().send_mail(MAIL, ADA)

    def test_connect_failure_raises_mail_delivery_error(self, smtp_class: MagicMock) -> None:
        smtp_class.side_effect = OSError("unreachable")

        with pytest.raises(MailDeliveryError):
            build_sender().send_mail(MAIL, ADA)

    def test_refused_recipient_raises_mail_delivery_error(
        self, smtp_class: MagicMock, smtp_client: MagicMock
    ) -> None:
        smtp_client.send_message.return_value = {"ada@example.com": (550, b"no such user")}

        with pytest.raises(MailDeliveryError):
            build_sender().send_mail(MAIL, ADA)

    def test_header_injection_raises_mail_delivery_error(self, smtp_class: MagicMock) -> None:
        """A CR/LF in the display name fails before any connection is opened."""
        recipient = Mailbox(name="Ada\r\nBcc: x@evil.test", address="ada@example.com")

        with pytest.raises(MailDeliveryError):
            build_sender().send_mail(MAIL, recipient)

        smtp_class.assert_not_called()

    def test_no_retry(self, smtp_class: MagicMock, smtp_client: MagicMock) -> None:
        """A failed send is attempted exactly once."""
        smtp_client.send_message.side_effect = smtplib.SMTPException("fail")

        with pytest.raises(MailDeliveryError):
            build_sender().send_mail(MAIL, ADA)

        assert smtp_client.send_message.call_count == 1

    def test_repr_hides_password(self) -> None:
        assert "s3cret" not in repr(build_sender(username="relay", password="s3cret"))
