"""
Domain layer - Pure business logic with zero framework imports.

This package contains the core business logic for self-service account
provisioning: a user, their personal organization and membership are created
atomically and a verification email is sent before anything is committed.
It defines its own port interfaces for infrastructure abstraction.
"""

from .credentials import Argon2CredentialHasher
from .exceptions import (
    CollaboratorError,
    HashingError,
    InternalRegistrationError,
    MailDeliveryError,
    PasswordTooShort,
    RegistrationDisabled,
    RegistrationError,
    StoreError,
    TokenIssuanceError,
    UserAlreadyExists,
)
from .mail import Mail, Mailbox, VerifyUserEmail
from .models import (
    Candidate,
    Membership,
    NewOrganization,
    NewUser,
    Registration,
    RegistrationConfig,
    Role,
)
from .notifications import NotificationDispatcher
from .ports import (
    CredentialHasher,
    EmailSender,
    InsertOutcome,
    RegistrationRepository,
    StoreTransaction,
    TokenIssuer,
)
from .provisioning import ProvisioningState, ProvisioningTransaction
from .registration import RegistrationService

__all__ = [
    "Argon2CredentialHasher",
    "Candidate",
    "CollaboratorError",
    "CredentialHasher",
    "EmailSender",
    "HashingError",
    "InsertOutcome",
    "InternalRegistrationError",
    "Mail",
    "MailDeliveryError",
    "Mailbox",
    "Membership",
    "NewOrganization",
    "NewUser",
    "NotificationDispatcher",
    "PasswordTooShort",
    "ProvisioningState",
    "ProvisioningTransaction",
    "Registration",
    "RegistrationConfig",
    "RegistrationDisabled",
    "RegistrationError",
    "RegistrationRepository",
    "RegistrationService",
    "Role",
    "StoreError",
    "StoreTransaction",
    "TokenIssuanceError",
    "TokenIssuer",
    "UserAlreadyExists",
    "VerifyUserEmail",
]
