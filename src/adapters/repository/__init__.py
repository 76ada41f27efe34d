"""Repository adapters - Database implementations."""

from .postgres import PostgresProvisioningTransaction, PostgresRegistrationRepository, run_migrations

__all__ = ["PostgresProvisioningTransaction", "PostgresRegistrationRepository", "run_migrations"]
