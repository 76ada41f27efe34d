"""
Domain exceptions - Semantic error types for registration.

Two families live here:

- RegistrationError and its subclasses are the caller-facing outcomes of
  ``RegistrationService.register``. They never carry collaborator detail.
- CollaboratorError and its subclasses are raised by ports (hasher, store,
  token issuer, mail transport) for unexpected failures. They stay inside
  the service, which logs them and converts them to InternalRegistrationError.
"""


class RegistrationError(Exception):
    """Base class for registration domain errors."""

    pass


class RegistrationDisabled(RegistrationError):
    """Self-service registration is switched off by the operator."""

    def __init__(self) -> None:
        super().__init__("Registrations are disabled")


class PasswordTooShort(RegistrationError):
    """Password is shorter than the configured minimum length."""

    def __init__(self, minimum_length: int) -> None:
        super().__init__(f"Password must be at least {minimum_length} characters long")
        self.minimum_length = minimum_length


class UserAlreadyExists(RegistrationError):
    """A user with this email already exists."""

    def __init__(self) -> None:
        super().__init__("A user with this email already exists")


class InternalRegistrationError(RegistrationError):
    """Opaque failure. Details are recorded in the logs, never returned."""

    def __init__(self) -> None:
        super().__init__("Registration failed")


class CollaboratorError(Exception):
    """Base class for unexpected failures reported by infrastructure ports."""

    pass


class HashingError(CollaboratorError):
    """Password digest could not be computed."""

    pass


class TokenIssuanceError(CollaboratorError):
    """Verification token could not be signed."""

    pass


class StoreError(CollaboratorError):
    """Durable store rejected or failed an operation."""

    pass


class MailDeliveryError(CollaboratorError):
    """Mail transport did not accept the message."""

    pass
