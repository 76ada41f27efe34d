"""
Port interfaces - Protocol definitions for infrastructure abstraction.

This module defines the interfaces (ports) that the domain requires
from infrastructure. Adapters implement these protocols.
"""

from contextlib import AbstractContextManager
from enum import Enum
from typing import Protocol
from uuid import UUID

from .mail import Mail, Mailbox
from .models import Membership, NewOrganization, NewUser


class InsertOutcome(Enum):
    """
    Result of the conditional user insert.

    Store failures are not an outcome: they raise StoreError.
    """

    CREATED = "created"
    ALREADY_EXISTS = "already_exists"


class StoreTransaction(Protocol):
    """
    Write-set of a single registration, bound to one store transaction.

    Obtained from RegistrationRepository.transaction(). Nothing written through
    it is visible to other readers until commit() returns.
    """

    def insert_user_if_absent(self, user: NewUser) -> InsertOutcome:
        """
        Insert the user unless a user with the same email exists.

        Must be a single atomic "insert or no-op" keyed on email uniqueness,
        never a read followed by a write. A concurrent transaction inserting
        the same email makes this call wait for that transaction's decision.

        Raises:
            StoreError: On any store failure
        """
        ...

    def insert_organization(self, organization: NewOrganization) -> None:
        """Insert the organization row. Raises StoreError on failure."""
        ...

    def insert_membership(self, membership: Membership) -> None:
        """Insert the user/organization binding. Raises StoreError on failure."""
        ...

    def commit(self) -> None:
        """Make the write-set durable. Raises StoreError on failure."""
        ...


class RegistrationRepository(Protocol):
    """Port interface for registration persistence."""

    def transaction(self) -> AbstractContextManager[StoreTransaction]:
        """
        Open a store transaction.

        Leaving the context without a successful commit() rolls back,
        whatever the exit path (exception, early return, cancellation).

        Raises:
            StoreError: If the transaction cannot be opened
        """
        ...


class CredentialHasher(Protocol):
    """Port interface for password digests."""

    def hash(self, plaintext: str) -> str:
        """
        Compute a salted, self-describing digest.

        Raises:
            HashingError: If the digest cannot be computed
        """
        ...

    def verify(self, digest: str, plaintext: str) -> bool:
        """Check plaintext against a digest produced by hash()."""
        ...


class TokenIssuer(Protocol):
    """Port interface for email verification tokens."""

    def issue(self, user_id: UUID) -> str:
        """
        Mint a signed, expiring, verification-only token for user_id.

        Returns:
            Serialized token, safe to embed verbatim in a URL query string

        Raises:
            TokenIssuanceError: If signing fails
        """
        ...


class EmailSender(Protocol):
    """Port interface for email delivery."""

    def send_mail(self, mail: Mail, recipient: Mailbox) -> None:
        """
        Hand a mail to the transport.

        Returns only once the transport accepted the message. No retries.

        Raises:
            MailDeliveryError: If the transport refused or failed
        """
        ...
