"""
Shared fixtures for adversarial tests.

Provides a registration service backed by the real PostgreSQL store so
concurrent attacks exercise the database's uniqueness guarantees.
"""

import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresRegistrationRepository
from src.domain.credentials import Argon2CredentialHasher
from src.domain.models import RegistrationConfig
from src.domain.registration import RegistrationService
from tests.fakes import RecordingEmailSender, StaticTokenIssuer


@pytest.fixture
def pool(clean_database: ConnectionPool) -> ConnectionPool:
    return clean_database


@pytest.fixture
def repository(pool: ConnectionPool) -> PostgresRegistrationRepository:
    """Create repository instance for each test."""
    return PostgresRegistrationRepository(pool, timeout_seconds=10.0)


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def pg_service(
    repository: PostgresRegistrationRepository, email_sender: RecordingEmailSender
) -> RegistrationService:
    """Registration service on PostgreSQL with cheap hashing."""
    return RegistrationService(
        repository=repository,
        email_sender=email_sender,
        token_issuer=StaticTokenIssuer(),
        config=RegistrationConfig(app_url="https://app.example.com"),
        hasher=Argon2CredentialHasher(time_cost=1, memory_cost=8, parallelism=1),
    )

