"""
API request and response models.

Pydantic models for FastAPI endpoint validation and OpenAPI schema generation.
"""

import unicodedata
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field, field_validator

EMAIL_MAX_LENGTH = 100


class RegistrationRequest(BaseModel):
    """Request model for self-service registration."""

    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr = Field(..., description=f"At most {EMAIL_MAX_LENGTH} characters")
    # The configured minimum is enforced by the service so the response can carry it
    password: str = Field(..., min_length=1, max_length=100)

    @field_validator("first_name", "last_name", "email", "password", mode="before")
    @classmethod
    def no_control_characters(cls, value: object) -> object:
        if isinstance(value, str) and any(unicodedata.category(c) == "Cc" for c in value):
            raise ValueError("must not contain control characters")
        return value

    @field_validator("email")
    @classmethod
    def email_within_length(cls, value: str) -> str:
        if len(value) > EMAIL_MAX_LENGTH:
            raise ValueError(f"email must be at most {EMAIL_MAX_LENGTH} characters")
        return value


class RegistrationResponse(BaseModel):
    """Response model for successful registration."""

    organization_id: UUID
    user_id: UUID


class ErrorResponse(BaseModel):
    """Standard error response model."""

    detail: str


class PasswordTooShortResponse(ErrorResponse):
    """Error response for a password below the configured minimum length."""

    minimum_length: int
