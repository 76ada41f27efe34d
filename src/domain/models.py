"""
Domain entities and value objects for account provisioning.

Plain frozen dataclasses only. Persistence shape lives in the repository
adapter, wire shape lives in the API models.
"""

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID


class Role(str, Enum):
    """Privilege level of a user inside an organization."""

    VIEWER = "viewer"
    EDITOR = "editor"


# Role granted on the personal organization created at registration.
INITIAL_ROLE = Role.EDITOR


@dataclass(frozen=True)
class RegistrationConfig:
    """
    Immutable process-wide registration policy.

    Built once from settings at startup and injected into RegistrationService.
    """

    registration_enabled: bool = True
    password_minimum_length: int = 12
    app_url: str = "http://localhost:8080"


@dataclass(frozen=True)
class Candidate:
    """Transient registration input. Never persisted as-is."""

    first_name: str
    last_name: str
    email: str
    password: str = field(repr=False)

    @property
    def display_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass(frozen=True)
class NewUser:
    id: UUID
    email: str
    password_digest: str = field(repr=False)
    first_name: str
    last_name: str


@dataclass(frozen=True)
class NewOrganization:
    id: UUID
    name: str
    created_by: UUID


@dataclass(frozen=True)
class Membership:
    user_id: UUID
    organization_id: UUID
    role: Role


@dataclass(frozen=True)
class Registration:
    """Identifiers returned to the caller after a committed registration."""

    organization_id: UUID
    user_id: UUID


def personal_organization_name(first_name: str, last_name: str) -> str:
    """Display name of the organization created for a new user."""
    return f"{first_name} {last_name}'s personal organization"
