"""
Registration domain service - Self-service account provisioning entry point.

Flow
====

1. Fail-fast checks, no store or mail access:
   - registration must be enabled (RegistrationDisabled)
   - email must be a well-formed address; upstream validation guarantees it,
     so a malformed one here is an internal error
   - password length must reach the configured minimum (PasswordTooShort)
2. A fresh ProvisioningTransaction creates user, personal organization and
   membership, mints the verification token, sends the verification mail and
   commits, in that order (see provisioning.py for the state machine).
3. Outcomes are mapped to a small vocabulary:
   - Registration on success
   - UserAlreadyExists when the email is taken
   - InternalRegistrationError for every collaborator failure, logged with
     full detail and returned without any
"""

import logging
from dataclasses import dataclass, field, replace

from email_validator import EmailNotValidError, validate_email

from .credentials import Argon2CredentialHasher
from .exceptions import (
    CollaboratorError,
    InternalRegistrationError,
    MailDeliveryError,
    PasswordTooShort,
    RegistrationDisabled,
    UserAlreadyExists,
)
from .mail import Mailbox
from .models import Candidate, Registration, RegistrationConfig
from .notifications import NotificationDispatcher
from .ports import CredentialHasher, EmailSender, RegistrationRepository, TokenIssuer
from .provisioning import ProvisioningTransaction

logger = logging.getLogger(__name__)


@dataclass
class RegistrationService:
    """
    Domain service for user registration.

    All collaborators and the registration policy are injected at
    construction; nothing is read from global state.
    """

    repository: RegistrationRepository
    email_sender: EmailSender
    token_issuer: TokenIssuer
    config: RegistrationConfig = field(default_factory=RegistrationConfig)
    hasher: CredentialHasher = field(default_factory=Argon2CredentialHasher)

    def register(self, candidate: Candidate) -> Registration:
        """
        Register a new user together with their personal organization.

        Args:
            candidate: First/last name, email and plaintext password

        Returns:
            Registration with the new organization and user identifiers

        Raises:
            RegistrationDisabled: If registration is switched off
            PasswordTooShort: If the password is below the configured minimum
            UserAlreadyExists: If the email is already registered
            InternalRegistrationError: On any unexpected collaborator failure
        """
        if not self.config.registration_enabled:
            raise RegistrationDisabled()

        candidate = replace(candidate, email=self._normalize_email(candidate.email))
        recipient = self._recipient(candidate)

        if len(candidate.password) < self.config.password_minimum_length:
            raise PasswordTooShort(self.config.password_minimum_length)

        provisioning = ProvisioningTransaction(
            repository=self.repository,
            hasher=self.hasher,
            token_issuer=self.token_issuer,
            dispatcher=NotificationDispatcher(self.email_sender, self.config.app_url),
        )
        try:
            registration = provisioning.run(candidate, recipient)
        except UserAlreadyExists:
            logger.info("Registration skipped: email already registered")
            raise
        except MailDeliveryError as e:
            logger.warning("Could not send verification email: %s", e, exc_info=e)
            raise InternalRegistrationError() from None
        except CollaboratorError as e:
            logger.error(
                "Registration aborted after %s: %s",
                provisioning.failed_in.value if provisioning.failed_in else "unknown",
                e,
                exc_info=e,
            )
            raise InternalRegistrationError() from None

        logger.info(
            "Registered user %s with personal organization %s",
            registration.user_id,
            registration.organization_id,
        )
        return registration

    def _normalize_email(self, email: str) -> str:
        """
        Normalize email address for consistent storage and lookup.

        Applies: strip whitespace + lowercase
        """
        return email.strip().lower()

    def _recipient(self, candidate: Candidate) -> Mailbox:
        """
        Build the verification mail recipient.

        The address was validated upstream; failing here means that
        validation was bypassed, which is an internal error.
        """
        try:
            validate_email(candidate.email, check_deliverability=False)
        except EmailNotValidError as e:
            logger.error("Error trying to parse email address: %s", e)
            raise InternalRegistrationError() from None
        return Mailbox(name=candidate.display_name, address=candidate.email)
