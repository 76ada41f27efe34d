"""
PostgreSQL repository adapter - Implements RegistrationRepository protocol.

This module provides the PostgreSQL implementation of the domain's
repository port using psycopg3 with raw SQL.

Concurrency Design - Duplicate Email Prevention:
-----------------------------------------------
1. **users.email UNIQUE**: The only source of idempotency. The user insert is
   ``INSERT ... ON CONFLICT (email) DO NOTHING``; the row count tells the
   domain whether the user was created or already existed.

2. **Uncommitted conflicts wait**: When two transactions insert the same email,
   the second blocks on the first's uncommitted index entry. If the first
   commits, the second gets 0 rows (ALREADY_EXISTS); if it rolls back, the
   second inserts. Exactly one attempt wins under READ COMMITTED.

3. **Single connection per write-set**: user, organization and membership
   are written on one pooled connection inside one transaction, committed
   only by an explicit commit() call. Every other exit rolls back.

4. **Bounded waits**: pool checkout and every statement are limited by the
   configured store timeout (local statement_timeout per transaction).
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import psycopg
from psycopg_pool import ConnectionPool

from src.domain.exceptions import StoreError
from src.domain.models import Membership, NewOrganization, NewUser
from src.domain.ports import InsertOutcome

logger = logging.getLogger(__name__)


class PostgresProvisioningTransaction:
    """
    Implements StoreTransaction protocol on a single psycopg connection.

    Uses structural subtyping - no explicit inheritance from Protocol.
    All SQL uses parameterized queries for security.
    """

    def __init__(self, conn: psycopg.Connection) -> None:
        self._conn = conn
        self.committed = False

    def insert_user_if_absent(self, user: NewUser) -> InsertOutcome:
        """
        Insert the user unless the email is already taken.

        Returns:
            CREATED if a row was inserted, ALREADY_EXISTS if the email
            conflict turned the insert into a no-op
        """
        sql = """
            INSERT INTO users (id, email, password_digest, first_name, last_name)
            VALUES (%s, %s, %s, %s, %s)
            ON CONFLICT (email) DO NOTHING
        """

        try:
            with self._conn.cursor() as cursor:
                cursor.execute(
                    sql,
                    (user.id, user.email, user.password_digest, user.first_name, user.last_name),
                )
                created = cursor.rowcount == 1
        except psycopg.Error as e:
            raise StoreError("Could not insert user") from e

        return InsertOutcome.CREATED if created else InsertOutcome.ALREADY_EXISTS

    def insert_organization(self, organization: NewOrganization) -> None:
        sql = """
            INSERT INTO organizations (id, name, created_by)
            VALUES (%s, %s, %s)
        """

        try:
            self._conn.execute(sql, (organization.id, organization.name, organization.created_by))
        except psycopg.Error as e:
            raise StoreError("Could not insert organization") from e

    def insert_membership(self, membership: Membership) -> None:
        sql = """
            INSERT INTO memberships (user_id, organization_id, role)
            VALUES (%s, %s, %s)
        """

        try:
            self._conn.execute(
                sql, (membership.user_id, membership.organization_id, membership.role.value)
            )
        except psycopg.Error as e:
            raise StoreError("Could not insert membership") from e

    def commit(self) -> None:
        try:
            self._conn.commit()
        except psycopg.Error as e:
            raise StoreError("Could not commit registration") from e
        self.committed = True


class PostgresRegistrationRepository:
    """
    Implements RegistrationRepository protocol via psycopg3.

    Uses structural subtyping - no explicit inheritance from Protocol.
    """

    def __init__(self, pool: ConnectionPool, timeout_seconds: float = 5.0) -> None:
        """
        Initialize repository with connection pool.

        Args:
            pool: psycopg3 ConnectionPool for database connections
            timeout_seconds: Upper bound for pool checkout and each statement
        """
        self._pool = pool
        self._timeout_seconds = timeout_seconds

    @contextmanager
    def transaction(self) -> Iterator[PostgresProvisioningTransaction]:
        """
        Open a transaction on a pooled connection.

        Rolls back on exit unless commit() succeeded, including when the
        block raises or the generator is closed early.
        """
        try:
            with self._pool.connection(timeout=self._timeout_seconds) as conn:
                tx = PostgresProvisioningTransaction(conn)
                try:
                    conn.execute(
                        "SELECT set_config('statement_timeout', %s, true)",
                        (f"{int(self._timeout_seconds * 1000)}ms",),
                    )
                    yield tx
                finally:
                    if not tx.committed and not conn.closed:
                        conn.rollback()
        except psycopg.Error as e:
            # PoolTimeout is an OperationalError too
            raise StoreError("Store transaction failed") from e


def run_migrations(pool: ConnectionPool) -> None:
    """
    Execute all SQL migration files from the migrations directory.

    Migrations are executed in sorted order (alphabetically by filename).
    Each migration should be idempotent (use IF NOT EXISTS, etc.).

    Args:
        pool: psycopg3 ConnectionPool instance
    """
    # Structure: src/adapters/repository/postgres.py -> migrations/
    migrations_dir = Path(__file__).parent.parent.parent.parent / "migrations"

    if not migrations_dir.exists():
        logger.warning("Migrations directory not found: %s", migrations_dir)
        return

    sql_files = sorted(migrations_dir.glob("*.sql"))

    if not sql_files:
        logger.info("No migration files found")
        return

    logger.info("Running %d migration(s)", len(sql_files))

    for sql_file in sql_files:
        logger.info("Executing migration: %s", sql_file.name)
        try:
            with pool.connection() as conn:
                conn.execute(sql_file.read_text())
            logger.info("Migration complete: %s", sql_file.name)
        except psycopg.Error as e:
            logger.error("Migration failed: %s - %s", sql_file.name, e)
            raise RuntimeError(f"Database migration failed: {sql_file.name}") from e
