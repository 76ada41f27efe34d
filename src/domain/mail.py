"""
Mail variants and recipients.

Mails are a closed set of named variants rather than free text. Each variant
knows its template name and the variables its template needs; rendering to
an actual message is the transport adapter's job.
"""

from dataclasses import dataclass
from email.headerregistry import Address
from typing import ClassVar


@dataclass(frozen=True)
class Mailbox:
    """Recipient display name and validated address."""

    name: str
    address: str

    def __str__(self) -> str:
        username, _, domain = self.address.rpartition("@")
        return str(Address(display_name=self.name, username=username, domain=domain))


@dataclass(frozen=True)
class VerifyUserEmail:
    """Asks a newly registered user to confirm their email address."""

    url: str

    template: ClassVar[str] = "verify_email"

    def variables(self) -> dict[str, str]:
        return {"url": self.url}


# Closed set of mail variants. Extend the union when adding a template.
Mail = VerifyUserEmail
