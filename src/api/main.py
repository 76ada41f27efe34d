"""
FastAPI application factory and configuration.

This module creates the FastAPI application instance,
configures logging and lifespan events.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import run_migrations
from src.adapters.smtp.console import ConsoleEmailSender
from src.adapters.smtp.smtp_sender import SmtpEmailSender
from src.adapters.tokens.jwt_issuer import JwtVerificationTokenIssuer
from src.api.v1 import router as v1_router
from src.config.settings import Settings, get_settings
from src.domain.ports import EmailSender

logger = logging.getLogger(__name__)

# OpenAPI tags for documentation grouping
tags_metadata = [
    {
        "name": "v1",
        "description": "Self-service registration API v1 - Create a user and their personal organization",
    },
]


def build_token_issuer(settings: Settings) -> JwtVerificationTokenIssuer:
    """
    Load the email verification signing key.

    Raises:
        RuntimeError: If no key is configured or the key is unusable
    """
    if settings.email_verification_private_key is None:
        raise RuntimeError("EMAIL_VERIFICATION_PRIVATE_KEY must be set")
    try:
        return JwtVerificationTokenIssuer(
            settings.email_verification_private_key.get_secret_value(),
            ttl_seconds=settings.email_verification_token_ttl_seconds,
        )
    except ValueError as e:
        raise RuntimeError(str(e)) from e


def build_email_sender(settings: Settings) -> EmailSender:
    """Select the mail transport from settings."""
    if settings.email_transport == "smtp":
        return SmtpEmailSender(
            host=settings.smtp_host,
            port=settings.smtp_port,
            sender=settings.sender_mailbox(),
            username=settings.smtp_username,
            password=(
                settings.smtp_password.get_secret_value() if settings.smtp_password else None
            ),
            starttls=settings.smtp_starttls,
            timeout_seconds=settings.mail_timeout_seconds,
        )
    return ConsoleEmailSender()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Manages application startup and shutdown:
    - Configures logging
    - Loads the token signing key and mail transport (fails fast if missing)
    - Creates database connection pool and runs migrations on startup
    - Closes connection pool on shutdown
    """
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info("Starting application...")

    app.state.token_issuer = build_token_issuer(settings)
    app.state.email_sender = build_email_sender(settings)
    logger.info("Mail transport: %s", settings.email_transport)

    logger.info("Connecting to database...")

    # Create connection pool with explicit sizing
    pool = ConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        timeout=settings.store_timeout_seconds,
    )

    # Run migrations
    logger.info("Running database migrations...")
    run_migrations(pool)

    # Store pool in app state for dependency injection
    app.state.pool = pool

    if not settings.registration_config().registration_enabled:
        logger.warning("Self-service registration is disabled")

    logger.info("Application startup complete")

    yield

    # Shutdown
    logger.info("Shutting down application...")
    pool.close()
    logger.info("Database connection pool closed")


app = FastAPI(
    title="onboarding",
    description="Self-service account provisioning API - Atomic user, organization and membership creation",
    version="0.1.0",
    openapi_tags=tags_metadata,
    lifespan=lifespan,
)

# Include v1 API routes
app.include_router(v1_router, prefix="/v1")


@app.get("/health")
def health_check(request: Request) -> dict[str, str]:
    """
    Health check endpoint with database validation.

    Returns 200 OK if application and database are healthy.
    Raises exception if database connection fails.
    """
    # Validate database connectivity
    pool = request.app.state.pool
    with pool.connection() as conn:
        conn.execute("SELECT 1")

    return {"status": "healthy"}
