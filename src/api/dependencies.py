"""
FastAPI dependencies - Dependency injection factories.

This module provides Depends() factories for injecting
domain services and infrastructure adapters into routes.
"""

from fastapi import Depends, Request
from psycopg_pool import ConnectionPool

from src.adapters.repository.postgres import PostgresRegistrationRepository
from src.config.settings import Settings, get_settings
from src.domain.ports import EmailSender, TokenIssuer
from src.domain.registration import RegistrationService


def get_pool(request: Request) -> ConnectionPool:
    """
    Get connection pool from app state.

    The pool is created during app lifespan startup and stored in app.state.
    """
    return request.app.state.pool


def get_repository(
    request: Request, settings: Settings = Depends(get_settings)
) -> PostgresRegistrationRepository:
    """Create repository with connection pool from app state."""
    pool = get_pool(request)
    return PostgresRegistrationRepository(pool, timeout_seconds=settings.store_timeout_seconds)


def get_email_sender(request: Request) -> EmailSender:
    """Get the mail transport built at startup (console or SMTP)."""
    return request.app.state.email_sender


def get_token_issuer(request: Request) -> TokenIssuer:
    """Get the verification token issuer built at startup."""
    return request.app.state.token_issuer


def get_registration_service(
    repository: PostgresRegistrationRepository = Depends(get_repository),
    email_sender: EmailSender = Depends(get_email_sender),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
    settings: Settings = Depends(get_settings),
) -> RegistrationService:
    """
    Create registration service with injected dependencies.

    Wires together the repository, mail transport, token issuer and the
    registration policy for the domain service.
    """
    return RegistrationService(
        repository=repository,
        email_sender=email_sender,
        token_issuer=token_issuer,
        config=settings.registration_config(),
    )
