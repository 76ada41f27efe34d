"""
Shared test fixtures and configuration.

This module provides pytest fixtures for:
- In-memory collaborators for unit tests
- A fast argon2 hasher (real algorithm, minimal cost)
- PostgreSQL connection pool and table cleanup, skipped when unreachable
"""

from collections.abc import Generator

import psycopg
import pytest
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.config.settings import get_settings
from src.domain.credentials import Argon2CredentialHasher
from src.domain.models import Candidate, RegistrationConfig
from src.domain.registration import RegistrationService
from tests.fakes import InMemoryRegistrationRepository, RecordingEmailSender, StaticTokenIssuer


@pytest.fixture
def hasher() -> Argon2CredentialHasher:
    """Argon2id with minimal cost so unit tests stay fast."""
    return Argon2CredentialHasher(time_cost=1, memory_cost=8, parallelism=1)


@pytest.fixture
def repository() -> InMemoryRegistrationRepository:
    return InMemoryRegistrationRepository()


@pytest.fixture
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture
def token_issuer() -> StaticTokenIssuer:
    return StaticTokenIssuer()


@pytest.fixture
def config() -> RegistrationConfig:
    return RegistrationConfig(
        registration_enabled=True,
        password_minimum_length=12,
        app_url="https://app.example.com",
    )


@pytest.fixture
def service(
    repository: InMemoryRegistrationRepository,
    email_sender: RecordingEmailSender,
    token_issuer: StaticTokenIssuer,
    config: RegistrationConfig,
    hasher: Argon2CredentialHasher,
) -> RegistrationService:
    """Registration service wired to in-memory collaborators."""
    return RegistrationService(
        repository=repository,
        email_sender=email_sender,
        token_issuer=token_issuer,
        config=config,
        hasher=hasher,
    )


@pytest.fixture
def ada() -> Candidate:
    return Candidate(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        password="correct-horse-battery",
    )


@pytest.fixture(scope="session")
def pg_pool() -> Generator[ConnectionPool, None, None]:
    """
    Connection pool against the configured database, with migrations applied.

    Skips every dependent test when PostgreSQL is not reachable.
    """
    settings = get_settings()
    try:
        with psycopg.connect(settings.database_url, connect_timeout=2):
            pass
    except psycopg.OperationalError as e:
        pytest.skip(f"PostgreSQL not reachable: {e}")

    pool = ConnectionPool(conninfo=settings.database_url, min_size=1, max_size=25, open=True)
    run_migrations(pool)
    yield pool
    pool.close()


@pytest.fixture
def clean_database(pg_pool: ConnectionPool) -> Generator[ConnectionPool, None, None]:
    """Empty the IAM tables before each test."""
    with pg_pool.connection() as conn:
        conn.execute("TRUNCATE memberships, organizations, users")
    yield pg_pool
