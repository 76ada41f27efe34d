"""
Provisioning transaction - Atomic creation of a user and its personal organization.

State Machine (Forward-Only Transitions)
========================================

    STARTED -> USER_INSERT_ATTEMPTED
    USER_INSERT_ATTEMPTED -> SKIPPED          (email already taken)
    USER_INSERT_ATTEMPTED -> USER_CREATED
    USER_CREATED -> ORG_AND_MEMBERSHIP_CREATED
    ORG_AND_MEMBERSHIP_CREATED -> TOKEN_ISSUED
    TOKEN_ISSUED -> EMAIL_ACCEPTED
    EMAIL_ACCEPTED -> COMMITTED
    any non-terminal -> ABORTED               (collaborator failure)

Terminal states: SKIPPED, COMMITTED, ABORTED.

Everything between opening and committing the store transaction is
invisible to other readers. The store commit is the last step and is only
reached once the mail transport accepted the verification mail, so a send
failure leaves no user, organization or membership behind.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from uuid import uuid4

from .exceptions import UserAlreadyExists
from .mail import Mailbox
from .models import (
    INITIAL_ROLE,
    Candidate,
    Membership,
    NewOrganization,
    NewUser,
    Registration,
    personal_organization_name,
)
from .notifications import NotificationDispatcher
from .ports import CredentialHasher, InsertOutcome, RegistrationRepository, TokenIssuer

logger = logging.getLogger(__name__)


class ProvisioningState(str, Enum):
    """Progress of a single provisioning attempt."""

    STARTED = "STARTED"
    USER_INSERT_ATTEMPTED = "USER_INSERT_ATTEMPTED"
    SKIPPED = "SKIPPED"
    USER_CREATED = "USER_CREATED"
    ORG_AND_MEMBERSHIP_CREATED = "ORG_AND_MEMBERSHIP_CREATED"
    TOKEN_ISSUED = "TOKEN_ISSUED"
    EMAIL_ACCEPTED = "EMAIL_ACCEPTED"
    COMMITTED = "COMMITTED"
    ABORTED = "ABORTED"


TERMINAL_STATES = frozenset(
    {ProvisioningState.SKIPPED, ProvisioningState.COMMITTED, ProvisioningState.ABORTED}
)


@dataclass
class ProvisioningTransaction:
    """
    One-shot orchestrator for the multi-row registration write.

    Create a new instance per registration attempt; run() may only be
    called once.
    """

    repository: RegistrationRepository
    hasher: CredentialHasher
    token_issuer: TokenIssuer
    dispatcher: NotificationDispatcher
    state: ProvisioningState = field(default=ProvisioningState.STARTED, init=False)
    # Last state reached before an abort, for diagnostics
    failed_in: ProvisioningState | None = field(default=None, init=False)

    def run(self, candidate: Candidate, recipient: Mailbox) -> Registration:
        """
        Provision user, organization and membership, then send the verification mail.

        Args:
            candidate: Registration input with an already normalized email
            recipient: Mailbox the verification mail is sent to

        Returns:
            Identifiers of the committed user and organization

        Raises:
            UserAlreadyExists: If the email is taken (transaction rolled back)
            CollaboratorError: Any hashing, store, signing or mail failure
                (transaction rolled back)
        """
        if self.state is not ProvisioningState.STARTED:
            raise RuntimeError(f"Provisioning already ran (state={self.state.value})")

        try:
            with self.repository.transaction() as tx:
                user_id = uuid4()
                user = NewUser(
                    id=user_id,
                    email=candidate.email,
                    password_digest=self.hasher.hash(candidate.password),
                    first_name=candidate.first_name,
                    last_name=candidate.last_name,
                )

                outcome = tx.insert_user_if_absent(user)
                self._advance(ProvisioningState.USER_INSERT_ATTEMPTED)
                if outcome is InsertOutcome.ALREADY_EXISTS:
                    self._advance(ProvisioningState.SKIPPED)
                    raise UserAlreadyExists()
                self._advance(ProvisioningState.USER_CREATED)

                organization = NewOrganization(
                    id=uuid4(),
                    name=personal_organization_name(candidate.first_name, candidate.last_name),
                    created_by=user_id,
                )
                tx.insert_organization(organization)
                tx.insert_membership(
                    Membership(user_id=user_id, organization_id=organization.id, role=INITIAL_ROLE)
                )
                self._advance(ProvisioningState.ORG_AND_MEMBERSHIP_CREATED)

                token = self.token_issuer.issue(user_id)
                self._advance(ProvisioningState.TOKEN_ISSUED)

                self.dispatcher.send_verification(recipient, token)
                self._advance(ProvisioningState.EMAIL_ACCEPTED)

                tx.commit()
                self._advance(ProvisioningState.COMMITTED)
        except BaseException:
            if self.state not in TERMINAL_STATES:
                self.failed_in = self.state
                self._advance(ProvisioningState.ABORTED)
            raise

        return Registration(organization_id=organization.id, user_id=user_id)

    def _advance(self, state: ProvisioningState) -> None:
        logger.debug("Provisioning state %s -> %s", self.state.value, state.value)
        self.state = state
