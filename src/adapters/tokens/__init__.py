"""Token adapters - Signed verification tokens."""

from .jwt_issuer import (
    EMAIL_VERIFICATION_PURPOSE,
    JwtVerificationTokenIssuer,
    VerificationClaims,
    generate_signing_key,
)

__all__ = [
    "EMAIL_VERIFICATION_PURPOSE",
    "JwtVerificationTokenIssuer",
    "VerificationClaims",
    "generate_signing_key",
]
